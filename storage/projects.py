# storage/projects.py
import logging
from pathlib import Path

from db import kv_delete, kv_get, kv_set
from errors import DuplicateProjectError, ProjectNotFoundError, ProjectValidationError
from models.project import now_iso, now_millis, stamp_timestamps

logger = logging.getLogger(__name__)

PROJECTS_KEY = "projects"


def list_projects(db_path: Path) -> list[dict]:
    projects = kv_get(db_path, PROJECTS_KEY, default=None)
    if not projects:
        return []
    return projects


def _save(db_path: Path, projects: list[dict]):
    kv_set(db_path, PROJECTS_KEY, projects, updated_at=now_iso())


def _check_project_data(data):
    if not isinstance(data, dict):
        raise ProjectValidationError("Project data must be an object")
    for name in ("id", "slug"):
        if name in data and (not isinstance(data[name], str) or not data[name].strip()):
            raise ProjectValidationError(f"Project {name} must be a non-empty string")


def create_project(db_path: Path, data: dict) -> dict:
    _check_project_data(data)
    if not isinstance(data.get("title"), str) or not data["title"].strip():
        raise ProjectValidationError("Project title is required")

    slug = data.get("slug")
    project_id = slug or f"project-{now_millis()}"
    existing = list_projects(db_path)
    for p in existing:
        if p.get("id") == project_id or (slug and p.get("slug") == slug):
            raise DuplicateProjectError("Project with this slug already exists")

    now = now_iso()
    project = {**data, "id": project_id, "createdAt": now, "updatedAt": now}
    _save(db_path, existing + [project])
    logger.info("project.created id=%s title=%s", project_id, project.get("title"))
    return project


def get_project(db_path: Path, project_id: str) -> dict | None:
    for p in list_projects(db_path):
        if p.get("id") == project_id:
            return p
    return None


def update_project(db_path: Path, project_id: str, data: dict) -> dict:
    if not isinstance(project_id, str) or not project_id:
        raise ProjectValidationError("Project ID is required")
    _check_project_data(data)
    projects = list_projects(db_path)
    for index, p in enumerate(projects):
        if p.get("id") == project_id:
            updated = {**p, **data, "id": project_id, "updatedAt": now_iso()}
            projects[index] = updated
            _save(db_path, projects)
            logger.info("project.updated id=%s", project_id)
            return updated
    raise ProjectNotFoundError("Project not found")


def delete_project(db_path: Path, project_id: str):
    projects = list_projects(db_path)
    remaining = [p for p in projects if p.get("id") != project_id]
    if len(remaining) == len(projects):
        raise ProjectNotFoundError("Project not found")
    _save(db_path, remaining)
    logger.info("project.deleted id=%s", project_id)


def migrate_projects(db_path: Path, projects) -> int:
    """Replace the whole collection with ``projects``."""
    if not isinstance(projects, list):
        raise ProjectValidationError("projects must be a list")
    for p in projects:
        _check_project_data(p)
    migrated = [stamp_timestamps(p) for p in projects]
    _save(db_path, migrated)
    logger.info("projects.migrated count=%d", len(migrated))
    return len(migrated)


def clear_projects(db_path: Path):
    kv_delete(db_path, PROJECTS_KEY)
    logger.info("projects.cleared")
