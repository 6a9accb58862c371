"""Redis implementation of CacheStore.

Plain string keys holding JSON payloads with a per-key expiry. Every
operation is bounded by the client's socket timeouts and converts
``redis.RedisError`` into a degraded result instead of raising.
"""

import redis
from loguru import logger

from autoscale_webapp.config import get_redis_client
from autoscale_webapp.entities import CacheDegraded, CacheHit, CacheLookup, CacheMiss


class RedisCacheStore:
    """Redis-backed expiring key/value cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Redis client instance (shared, thread-safe pool).
        """
        self._client = redis_client

    @classmethod
    def create(cls) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore from settings."""
        return cls(redis_client=get_redis_client())

    def get(self, key: str) -> CacheLookup:
        """Look up a key, reporting connectivity failures as degraded."""
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            logger.warning("Cache read degraded for key {}: {}", key, e)
            return CacheDegraded(reason=str(e))

        if value is None:
            return CacheMiss()
        return CacheHit(value=bytes(value))  # type: ignore[arg-type]

    def set(self, key: str, value: bytes, ttl: int) -> bool:
        """Write ``value`` under ``key`` with a single SET ... EX."""
        try:
            self._client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            logger.warning("Cache write failed for key {}: {}", key, e)
            return False
        return True

    def delete(self, key: str) -> bool:
        """Delete ``key``. Deleting a missing key still counts as success."""
        try:
            self._client.delete(key)
        except redis.RedisError as e:
            logger.warning("Cache delete failed for key {}: {}", key, e)
            return False
        return True

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        """Release the client's connection pool."""
        self._client.close()
        self._client.connection_pool.disconnect()
