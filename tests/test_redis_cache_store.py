"""
Tests for the Redis cache adapter.
"""

from unittest.mock import MagicMock

import pytest
import redis

from autoscale_webapp.config import Settings, get_redis_client
from autoscale_webapp.entities import CacheDegraded, CacheHit, CacheMiss
from autoscale_webapp.protocols import CacheStore
from autoscale_webapp.repositories import RedisCacheStore


@pytest.fixture
def redis_client():
    """A mocked Redis client."""
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def cache_store(redis_client):
    return RedisCacheStore(redis_client=redis_client)


def test_satisfies_protocol(cache_store):
    """RedisCacheStore structurally satisfies CacheStore."""
    assert isinstance(cache_store, CacheStore)


def test_get_hit(cache_store, redis_client):
    redis_client.get.return_value = b'{"id":1}'

    assert cache_store.get("user:1") == CacheHit(value=b'{"id":1}')
    redis_client.get.assert_called_once_with("user:1")


def test_get_miss(cache_store, redis_client):
    redis_client.get.return_value = None

    assert cache_store.get("user:1") == CacheMiss()


@pytest.mark.parametrize(
    "error",
    [redis.ConnectionError("Connection refused"), redis.TimeoutError("Timeout reading from socket")],
)
def test_get_degraded(cache_store, redis_client, error):
    """Connection errors and timeouts degrade instead of raising."""
    redis_client.get.side_effect = error

    lookup = cache_store.get("users:all")

    assert isinstance(lookup, CacheDegraded)
    assert str(error) in lookup.reason


def test_set_uses_expiry(cache_store, redis_client):
    assert cache_store.set("users:all", b"[]", 300) is True
    redis_client.set.assert_called_once_with("users:all", b"[]", ex=300)


def test_set_failure_swallowed(cache_store, redis_client):
    redis_client.set.side_effect = redis.ConnectionError("Connection refused")

    assert cache_store.set("users:all", b"[]", 300) is False


def test_delete(cache_store, redis_client):
    redis_client.delete.return_value = 0  # key was absent

    assert cache_store.delete("users:all") is True
    redis_client.delete.assert_called_once_with("users:all")


def test_delete_failure_swallowed(cache_store, redis_client):
    redis_client.delete.side_effect = redis.TimeoutError("Timeout")

    assert cache_store.delete("users:all") is False


def test_health_check(cache_store, redis_client):
    redis_client.ping.return_value = True
    assert cache_store.health_check() is True

    redis_client.ping.side_effect = redis.ConnectionError("down")
    assert cache_store.health_check() is False


def test_unreachable_server_degrades():
    """A real client pointed at a closed port degrades on every operation."""
    config = Settings(redis_url="redis://127.0.0.1:1/0", redis_socket_timeout=0.2)
    cache_store = RedisCacheStore(redis_client=get_redis_client(config))

    assert isinstance(cache_store.get("users:all"), CacheDegraded)
    assert cache_store.set("users:all", b"[]", 60) is False
    assert cache_store.delete("users:all") is False
    assert cache_store.health_check() is False

    cache_store.close()
