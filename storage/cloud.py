# storage/cloud.py
"""Access to the shared cloud project store.

``CloudProjectsClient`` talks to ``/api/projects`` over HTTP;
``DatabaseProjectsSource`` serves the same calls in-process for the site's own
pages. Both raise ``CloudStoreError`` on any failure.
"""
import logging
import sqlite3
from pathlib import Path
from typing import Protocol

import httpx

from errors import CloudStoreError, StudioError
from storage import projects as project_db

logger = logging.getLogger(__name__)

API_PATH = "/api/projects"


class CloudSource(Protocol):
    async def list_projects(self) -> list[dict]: ...

    async def migrate_projects(self, records: list[dict]) -> int: ...


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"HTTP error! status: {resp.status_code}"


class CloudProjectsClient:
    def __init__(self, base_url: str, timeout: float = 40, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, params: dict | None = None, json: dict | None = None):
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                resp = await client.request(method, API_PATH, params=params, json=json)
            except httpx.HTTPError as e:
                raise CloudStoreError(f"cloud store unreachable: {e}") from e

        if resp.status_code >= 400:
            raise CloudStoreError(_error_message(resp), status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise CloudStoreError("cloud store returned invalid JSON", status_code=resp.status_code) from e

    async def list_projects(self) -> list[dict]:
        data = await self._request("GET")
        if not isinstance(data, list):
            raise CloudStoreError("cloud store returned a non-list project collection")
        return [p for p in data if isinstance(p, dict)]

    async def create_project(self, project: dict) -> dict:
        return await self._request("POST", json={"action": "create", "project": project})

    async def update_project(self, project_id: str, project: dict) -> dict:
        return await self._request("POST", json={"action": "update", "id": project_id, "project": project})

    async def delete_project(self, project_id: str):
        await self._request("DELETE", params={"id": project_id})

    async def migrate_projects(self, records: list[dict]) -> int:
        data = await self._request("POST", json={"action": "migrate", "projects": records})
        if not isinstance(data, dict) or not data.get("success"):
            raise CloudStoreError("cloud store did not confirm the migration")
        return int(data.get("count", len(records)))

    async def clear_all(self):
        await self._request("DELETE", params={"action": "clear-all"})


class DatabaseProjectsSource:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    async def list_projects(self) -> list[dict]:
        try:
            return project_db.list_projects(self.db_path)
        except (StudioError, sqlite3.Error, OSError, ValueError) as e:
            raise CloudStoreError(f"project database unavailable: {e}") from e

    async def migrate_projects(self, records: list[dict]) -> int:
        try:
            return project_db.migrate_projects(self.db_path, records)
        except (StudioError, sqlite3.Error, OSError, ValueError) as e:
            raise CloudStoreError(f"project database unavailable: {e}") from e
