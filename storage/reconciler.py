# storage/reconciler.py
"""Reconciles portfolio projects held on this device with the cloud store.

Reads merge the local store and the cloud store into one list ordered by
``order``; a project id seen in the local store hides the cloud copy with the
same id. Migration is one-way (local -> cloud) and clears the whole local
collection once the cloud confirms the batch, including entries written after
the snapshot being migrated was taken.

None of the read or migration operations raise: unreadable local data counts
as empty, an unreachable cloud store counts as empty, and migration failures
are reported in the result.
"""
import copy
import logging
from dataclasses import dataclass

import httpx

from errors import CloudStoreError, LocalStoreError
from models.project import normalize_record, now_iso, now_millis, order_key, parse_featured_flag, stamp_timestamps
from storage.cloud import CloudSource
from storage.defaults import default_catalog_records, is_sample_entry
from storage.local_store import LocalStore

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    success: bool
    count: int = 0
    message: str = ""
    error: str | None = None


@dataclass
class CleanupResult:
    success: bool
    message: str
    removed_count: int = 0


def merge_records(*sources: list[dict]) -> list[dict]:
    """Concatenate sources keeping the first record seen for each id."""
    merged = []
    seen = set()
    for records in sources:
        for record in records:
            record_id = record.get("id")
            # only string ids are compared; other records are kept like id-less ones
            if isinstance(record_id, str):
                if record_id in seen:
                    continue
                seen.add(record_id)
            merged.append(record)
    return merged


def is_test_entry(record: dict) -> bool:
    title = record.get("title")
    return isinstance(title, str) and "test" in title.lower()


class ProjectReconciler:
    def __init__(self, local: LocalStore, cloud: CloudSource, default_catalog: list[dict] | None = None):
        self.local = local
        self.cloud = cloud
        self.default_catalog = default_catalog if default_catalog is not None else default_catalog_records()

    # ---------------------------
    # Reads
    # ---------------------------
    def _read_local(self) -> list[dict]:
        try:
            return self.local.read()
        except LocalStoreError as e:
            logger.warning("local_store.unreadable error=%s", e)
            return []

    async def _read_cloud(self) -> list[dict]:
        try:
            return await self.cloud.list_projects()
        except (CloudStoreError, httpx.HTTPError) as e:
            logger.warning("cloud_store.unavailable error=%s", e)
            return []

    async def list_projects(self) -> list[dict]:
        local = [normalize_record(r) for r in self._read_local()]
        cloud = [normalize_record(r) for r in await self._read_cloud()]
        merged = merge_records(local, cloud)
        logger.debug("projects.listed local=%d cloud=%d merged=%d", len(local), len(cloud), len(merged))
        return sorted(merged, key=order_key)

    async def list_featured_projects(self, include_test_entries: bool = False) -> list[dict]:
        featured = [
            p for p in await self.list_projects()
            if p["featured"] and (include_test_entries or not is_test_entry(p))
        ]
        if not featured:
            logger.info("projects.featured_fallback count=%d", len(self.default_catalog))
            return copy.deepcopy(self.default_catalog)
        return featured

    async def get_project_by_slug(self, slug: str) -> dict | None:
        for project in await self.list_projects():
            if project.get("slug") == slug:
                return project
        return None

    # ---------------------------
    # Migration
    # ---------------------------
    async def migrate_local_to_cloud(self, records: list[dict]) -> MigrationResult:
        if not records:
            return MigrationResult(success=True, count=0, message="Nothing to migrate")

        batch = [stamp_timestamps(r) for r in records]
        try:
            count = await self.cloud.migrate_projects(batch)
        except (CloudStoreError, httpx.HTTPError) as e:
            logger.warning("projects.migration_failed count=%d error=%s", len(batch), e)
            return MigrationResult(success=False, message="Migration failed", error=str(e))

        message = f"Migrated {count} projects to cloud storage"
        try:
            self.local.clear()
        except (LocalStoreError, OSError) as e:
            logger.warning("local_store.clear_failed error=%s", e)
            return MigrationResult(
                success=True,
                count=count,
                message=f"{message}, but local storage could not be cleared",
                error=f"local storage not cleared: {e}",
            )
        logger.info("projects.migrated count=%d", count)
        return MigrationResult(success=True, count=count, message=message)

    async def migrate_pending(self) -> MigrationResult:
        return await self.migrate_local_to_cloud(self._read_local())

    def force_cloud_sync(self):
        self.local.clear()
        logger.info("local_store.cleared reason=force_cloud_sync")

    # ---------------------------
    # Local edits
    # ---------------------------
    def toggle_featured(self, project_id: str) -> bool | None:
        records = self._read_local()
        for record in records:
            if record.get("id") == project_id:
                record["featured"] = not parse_featured_flag(record.get("featured"))
                self.local.write(records)
                logger.info("project.featured_toggled id=%s featured=%s", project_id, record["featured"])
                return record["featured"]
        return None

    def add_local_project(self, data: dict) -> dict:
        records = self._read_local()
        slug = data.get("slug")
        for record in records:
            if record.get("title") == data.get("title") or (slug and record.get("slug") == slug):
                logger.info("project.exists title=%s", data.get("title"))
                return record

        now = now_iso()
        project = {"id": f"project-{now_millis()}", **data, "createdAt": now, "updatedAt": now}
        records.append(project)
        self.local.write(records)
        logger.info("project.added_local id=%s", project["id"])
        return project

    def update_local_project(self, project_id: str, fields: dict) -> dict | None:
        records = self._read_local()
        for index, record in enumerate(records):
            if record.get("id") == project_id:
                updated = {**record, **fields, "id": project_id, "updatedAt": now_iso()}
                records[index] = updated
                self.local.write(records)
                logger.info("project.updated_local id=%s", project_id)
                return updated
        return None

    def remove_local_projects(self, identifiers: list[str]) -> CleanupResult:
        wanted = set(identifiers)
        return self._remove_where(
            lambda r: any(isinstance(r.get(k), str) and r.get(k) in wanted for k in ("id", "slug", "title")),
            noun="project(s)",
        )

    def remove_sample_entries(self) -> CleanupResult:
        return self._remove_where(is_sample_entry, noun="sample projects")

    def _remove_where(self, predicate, noun: str) -> CleanupResult:
        try:
            records = self.local.read()
        except LocalStoreError as e:
            logger.warning("local_store.unreadable error=%s", e)
            return CleanupResult(success=False, message=f"Failed to remove {noun}: {e}")
        if not records:
            return CleanupResult(success=True, message="No projects found in local storage")

        kept = [r for r in records if not predicate(r)]
        removed = len(records) - len(kept)
        self.local.write(kept)
        logger.info("local_store.removed count=%d kept=%d", removed, len(kept))
        return CleanupResult(
            success=True,
            message=f"Removed {removed} {noun}. {len(kept)} projects remain.",
            removed_count=removed,
        )

    def has_sample_entries(self) -> bool:
        return any(is_sample_entry(r) for r in self._read_local())

    def list_user_entries(self) -> list[dict]:
        return [r for r in self._read_local() if not is_sample_entry(r)]
