"""Cache storage protocol.

Defines the interface for the expiring key/value store that sits in front
of the user store. Implementations must never raise on connectivity
problems: reads report ``CacheDegraded`` and writes return ``False``.

Implementations can include:
- Redis (default)
- An in-process dict (tests)
- Memcached, Valkey, ...
"""

from typing import Protocol, runtime_checkable

from autoscale_webapp.entities import CacheLookup


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache backends.

    Example:
        ```python
        from autoscale_webapp.protocols import CacheStore

        cache: CacheStore = RedisCacheStore(redis_client)
        ```
    """

    def get(self, key: str) -> CacheLookup:
        """Look up a key.

        Args:
            key: The cache key

        Returns:
            CacheHit with the stored bytes, CacheMiss, or CacheDegraded
        """
        ...

    def set(self, key: str, value: bytes, ttl: int) -> bool:
        """Store a value atomically with an expiry.

        Args:
            key: The cache key
            value: Serialized payload
            ttl: Time-to-live in seconds

        Returns:
            True if written, False if the cache was unavailable
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove a key. Absence of the key is not a failure.

        Args:
            key: The cache key

        Returns:
            True if the cache acknowledged the delete, False if unavailable
        """
        ...

    def health_check(self) -> bool:
        """Check if the cache is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
