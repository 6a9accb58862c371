"""
API behaviour while the database is unreachable.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from autoscale_webapp.api.app import create_app
from autoscale_webapp.api.dependencies import install_services
from autoscale_webapp.repositories import SqlUserStore
from autoscale_webapp.services import LoadService


@pytest.fixture
def outage_client(tmp_path, cache):
    engine = create_engine(f"sqlite:///{tmp_path}/missing-dir/users.db")
    app = create_app(app_lifespan=None)
    install_services(app, store=SqlUserStore(engine=engine), cache=cache, load_service=LoadService(iterations=10))
    yield TestClient(app)
    engine.dispose()


def test_reads_fail_with_503(outage_client):
    for path in ["/api/users", "/api/users/1"]:
        response = outage_client.get(path)
        assert response.status_code == 503
        assert response.json()["code"] == "store_unavailable"


def test_create_fails_with_503(outage_client, cache):
    response = outage_client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})

    assert response.status_code == 503
    assert response.json()["code"] == "store_unavailable"
    assert cache.calls["delete"] == 0


def test_health_stays_healthy(outage_client):
    response = outage_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "disconnected"


def test_not_ready(outage_client):
    response = outage_client.get("/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "database": "disconnected"}


def test_stress_unaffected(outage_client):
    response = outage_client.get("/api/stress")
    assert response.status_code == 200
    assert response.json()["result"] == 45


def test_ready_after_store_recovers(tmp_path, cache):
    """A store that was down at startup gets its schema once it comes back."""
    engine = create_engine(f"sqlite:///{tmp_path}/late/users.db")
    app = create_app(app_lifespan=None)
    install_services(app, store=SqlUserStore(engine=engine), cache=cache, load_service=LoadService(iterations=10))
    client = TestClient(app)

    assert client.get("/ready").status_code == 503

    (tmp_path / "late").mkdir()

    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "connected"}

    response = client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})
    assert response.status_code == 201
    assert client.get("/api/users").json()[0]["email"] == "ada@example.com"
    engine.dispose()


def test_ready_creates_missing_schema(engine, cache):
    """Reachable store without the users table is not served as-is."""
    store = SqlUserStore(engine=engine)
    app = create_app(app_lifespan=None)
    install_services(app, store=store, cache=cache, load_service=LoadService(iterations=10))
    client = TestClient(app)

    assert not store.schema_ready
    assert client.get("/ready").status_code == 200
    assert store.schema_ready

    assert client.get("/api/users").json() == []
    assert client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"}).status_code == 201
