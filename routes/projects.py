# routes/projects.py
import logging
import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from errors import StudioError
from storage.projects import (
    clear_projects,
    create_project,
    delete_project,
    list_projects,
    migrate_projects,
    update_project,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


def _error(message: str, status_code: int):
    return JSONResponse({"error": message}, status_code=status_code)


@router.get("")
async def list_projects_api(request: Request):
    db_path = request.app.state.config.db_path
    try:
        projects = list_projects(db_path)
    except (sqlite3.Error, ValueError):
        logger.exception("projects.list_failed")
        return _error("Internal server error", 500)
    logger.info("projects.listed count=%d", len(projects))
    return projects


@router.post("")
async def write_projects_api(request: Request):
    db_path = request.app.state.config.db_path
    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON body", 400)
    if not isinstance(body, dict):
        return _error("Invalid action", 400)

    action = body.get("action")
    try:
        if action == "create":
            return create_project(db_path, body.get("project"))
        if action == "update":
            return update_project(db_path, body.get("id"), body.get("project") or {})
        if action == "migrate":
            count = migrate_projects(db_path, body.get("projects"))
            return {"success": True, "count": count}
    except StudioError as e:
        return _error(str(e), getattr(e, "status_code", 400))
    except sqlite3.Error:
        logger.exception("projects.write_failed action=%s", action)
        return _error("Internal server error", 500)

    return _error("Invalid action", 400)


@router.delete("")
async def delete_projects_api(request: Request, id: str | None = None, action: str | None = None):
    db_path = request.app.state.config.db_path
    try:
        if action == "clear-all":
            clear_projects(db_path)
            return {"success": True}
        if not id:
            return _error("Project ID is required", 400)
        delete_project(db_path, id)
    except StudioError as e:
        return _error(str(e), getattr(e, "status_code", 400))
    except sqlite3.Error:
        logger.exception("projects.delete_failed id=%s", id)
        return _error("Internal server error", 500)
    return {"success": True}


@router.get("/status")
async def projects_status_api(request: Request):
    config = request.app.state.config
    try:
        count = len(list_projects(config.db_path))
        reachable = True
        error = None
    except (sqlite3.Error, ValueError) as e:
        count = 0
        reachable = False
        error = str(e)

    return {
        "status": "Project database status",
        "configured": reachable,
        "details": {
            "database": str(config.db_path),
            "upload_dir": str(config.upload_dir),
            "project_count": count,
        },
        "error": error,
        "message": "Cloud storage is available" if reachable else "Cloud storage is not reachable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
