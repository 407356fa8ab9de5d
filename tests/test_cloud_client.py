"""Tests for the HTTP cloud store client."""
import httpx
import pytest

from errors import CloudStoreError
from storage.cloud import CloudProjectsClient, DatabaseProjectsSource
from storage.local_store import MemoryLocalStore
from storage.reconciler import ProjectReconciler


@pytest.fixture
def cloud(site_app):
    return CloudProjectsClient("http://testserver", transport=httpx.ASGITransport(app=site_app))


@pytest.mark.anyio
async def test_client_crud_against_site(cloud):
    created = await cloud.create_project({"title": "Harbor", "slug": "harbor"})
    assert created["id"] == "harbor"

    updated = await cloud.update_project("harbor", {"order": 4})
    assert updated["order"] == 4

    assert [p["id"] for p in await cloud.list_projects()] == ["harbor"]

    await cloud.delete_project("harbor")
    assert await cloud.list_projects() == []


@pytest.mark.anyio
async def test_client_surfaces_server_error_message(cloud):
    await cloud.create_project({"title": "Harbor", "slug": "harbor"})
    with pytest.raises(CloudStoreError) as info:
        await cloud.create_project({"title": "Again", "slug": "harbor"})
    assert info.value.status_code == 400
    assert info.value.message == "Project with this slug already exists"


@pytest.mark.anyio
async def test_client_migrate_and_clear(cloud):
    assert await cloud.migrate_projects([{"id": "a"}, {"id": "b"}]) == 2
    await cloud.clear_all()
    assert await cloud.list_projects() == []


@pytest.mark.anyio
async def test_transport_failure_becomes_cloud_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = CloudProjectsClient("http://cloud.invalid", transport=httpx.MockTransport(refuse))
    with pytest.raises(CloudStoreError):
        await client.list_projects()


@pytest.mark.anyio
async def test_non_list_payload_is_an_error():
    client = CloudProjectsClient(
        "http://cloud.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"projects": []})),
    )
    with pytest.raises(CloudStoreError):
        await client.list_projects()


@pytest.mark.anyio
async def test_server_error_without_json_body():
    client = CloudProjectsClient(
        "http://cloud.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
    )
    with pytest.raises(CloudStoreError) as info:
        await client.migrate_projects([{"id": "a"}])
    assert info.value.status_code == 500
    assert "500" in info.value.message


@pytest.mark.anyio
async def test_migration_round_trip_through_site(cloud):
    store = MemoryLocalStore([{"id": "local-1", "title": "Local", "featured": "1", "order": 1}])
    reconciler = ProjectReconciler(local=store, cloud=cloud)

    result = await reconciler.migrate_pending()

    assert result.success is True
    assert result.count == 1
    assert store.read() == []
    projects = await reconciler.list_projects()
    assert [p["id"] for p in projects] == ["local-1"]
    assert projects[0]["featured"] is True


@pytest.mark.anyio
async def test_reconciler_survives_unreachable_site():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    cloud = CloudProjectsClient("http://cloud.invalid", transport=httpx.MockTransport(refuse))
    store = MemoryLocalStore([{"id": "a"}])
    reconciler = ProjectReconciler(local=store, cloud=cloud)

    assert [p["id"] for p in await reconciler.list_projects()] == ["a"]
    result = await reconciler.migrate_pending()
    assert result.success is False
    assert store.read() == [{"id": "a"}]


@pytest.mark.anyio
async def test_database_source_reads_kv_store(settings, site_app):
    source = DatabaseProjectsSource(settings.db_path)
    assert await source.migrate_projects([{"id": "a"}]) == 1
    assert [p["id"] for p in await source.list_projects()] == ["a"]
