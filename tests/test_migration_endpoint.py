from app.main import app
from app.api import deps


def test_run_migration(client):
    r = client.post("/api/v1/migration/run")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "completed"
    assert data["total_products"] == 2
    assert data["successful_uploads"] == 1
    assert data["failed_uploads"] == 1
    assert data["catalog_complete"] is True
    assert [item["state"] for item in data["results"]] == ["done", "failed"]
    assert data["results"][1]["error"] == "Product creation failed"


def test_run_migration_rejects_concurrent_run(client):
    class _Busy:
        is_running = True

        async def run(self):
            raise AssertionError("should not start a second run")

    app.dependency_overrides[deps.get_migration_service] = lambda: _Busy()
    r = client.post("/api/v1/migration/run")
    assert r.status_code == 409


def test_run_migration_failure_is_500(client):
    class _Broken:
        is_running = False

        async def run(self):
            raise RuntimeError("catalog unreachable")

    app.dependency_overrides[deps.get_migration_service] = lambda: _Broken()
    r = client.post("/api/v1/migration/run")
    assert r.status_code == 500
    assert "catalog unreachable" in r.json()["detail"]
