"""
Shared fixtures: a real SqlUserStore on in-memory SQLite, an in-memory
cache implementing the CacheStore protocol, and an app wired to both.
"""

from collections import Counter

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from autoscale_webapp.api.app import create_app
from autoscale_webapp.api.dependencies import install_services
from autoscale_webapp.entities import CacheDegraded, CacheHit, CacheLookup, CacheMiss, UserEntity
from autoscale_webapp.repositories import CacheAsideUserRepository, SqlUserStore
from autoscale_webapp.services import LoadService


class FakeCacheStore:
    """In-memory CacheStore with a manual clock and an outage switch."""

    def __init__(self) -> None:
        self.entries: dict[str, tuple[bytes, float]] = {}
        self.now = 0.0
        self.available = True
        self.calls: Counter = Counter()

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def contains(self, key: str) -> bool:
        entry = self.entries.get(key)
        return entry is not None and entry[1] > self.now

    def get(self, key: str) -> CacheLookup:
        self.calls["get"] += 1
        if not self.available:
            return CacheDegraded(reason="connection refused")
        if not self.contains(key):
            return CacheMiss()
        return CacheHit(value=self.entries[key][0])

    def set(self, key: str, value: bytes, ttl: int) -> bool:
        self.calls["set"] += 1
        if not self.available:
            return False
        self.entries[key] = (value, self.now + ttl)
        return True

    def delete(self, key: str) -> bool:
        self.calls["delete"] += 1
        if not self.available:
            return False
        self.entries.pop(key, None)
        return True

    def health_check(self) -> bool:
        return self.available


class CountingUserStore:
    """Wraps a UserStore and counts every store round trip."""

    def __init__(self, inner: SqlUserStore) -> None:
        self._inner = inner
        self.calls: Counter = Counter()

    def list_users(self) -> list[UserEntity]:
        self.calls["list_users"] += 1
        return self._inner.list_users()

    def get_user(self, user_id: int) -> UserEntity | None:
        self.calls["get_user"] += 1
        return self._inner.get_user(user_id)

    def insert_user(self, name: str, email: str) -> UserEntity:
        self.calls["insert_user"] += 1
        return self._inner.insert_user(name=name, email=email)

    def health_check(self) -> bool:
        return self._inner.health_check()

    def is_ready(self) -> bool:
        return self._inner.is_ready()


@pytest.fixture
def engine():
    """In-memory SQLite shared by every thread of the test."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(engine) -> SqlUserStore:
    store = SqlUserStore(engine=engine)
    store.create_schema()
    return store


@pytest.fixture
def store(sql_store) -> CountingUserStore:
    return CountingUserStore(sql_store)


@pytest.fixture
def cache() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def repository(store, cache) -> CacheAsideUserRepository:
    return CacheAsideUserRepository(store=store, cache=cache, ttl=300)


@pytest.fixture
def client(store, cache):
    """Test client without lifespan; dependencies wired explicitly."""
    app = create_app(app_lifespan=None)
    install_services(app, store=store, cache=cache, load_service=LoadService(iterations=1000))
    return TestClient(app)
