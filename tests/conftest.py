"""
Pytest configuration and fixtures.

Points the module-level app at a throwaway directory before anything imports it.
"""
import os
import tempfile
from pathlib import Path

_scratch = Path(tempfile.mkdtemp(prefix="studio-site-tests-"))
os.environ.setdefault("SITE_DB_PATH", str(_scratch / "app.db"))
os.environ.setdefault("SITE_UPLOAD_DIR", str(_scratch / "uploads"))
os.environ.setdefault("SITE_INBOX_DIR", str(_scratch / "inbox"))
os.environ.setdefault("SITE_LOCAL_STORE_PATH", str(_scratch / "local_store.json"))

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from errors import CloudStoreError


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        db_path=tmp_path / "app.db",
        upload_dir=tmp_path / "uploads",
        inbox_dir=tmp_path / "inbox",
        local_store_path=tmp_path / "local_store.json",
        max_upload_mb=1,
    )


@pytest.fixture
def site_app(settings):
    return create_app(settings)


@pytest.fixture
def client(site_app):
    return TestClient(site_app)


class FakeCloud:
    """Cloud source double recording calls."""

    def __init__(self, projects=None, fail_list=False, fail_migrate=False):
        self.projects = list(projects or [])
        self.fail_list = fail_list
        self.fail_migrate = fail_migrate
        self.list_calls = 0
        self.migrated = []

    async def list_projects(self):
        self.list_calls += 1
        if self.fail_list:
            raise CloudStoreError("connection refused")
        return [dict(p) for p in self.projects]

    async def migrate_projects(self, records):
        self.migrated.append(records)
        if self.fail_migrate:
            raise CloudStoreError("Internal server error", status_code=500)
        self.projects = list(records)
        return len(records)


@pytest.fixture
def fake_cloud():
    return FakeCloud()
