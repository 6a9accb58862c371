"""Dependency checks for liveness and readiness.

Both checks run the blocking pings in worker threads and bound the wait,
so a hung dependency can never stall a check past ``health_timeout``.
"""

import asyncio
from collections.abc import Callable

from autoscale_webapp.config import settings
from autoscale_webapp.protocols import CacheStore, UserStore


async def _bounded_check(check: Callable[[], bool], timeout: float) -> bool:
    """Run a blocking health check with an upper bound on the wait."""
    try:
        return await asyncio.wait_for(asyncio.to_thread(check), timeout=timeout)
    except asyncio.TimeoutError:
        return False


class HealthService:
    """Reports store and cache reachability.

    Liveness never depends on the result; readiness depends on the store.
    """

    def __init__(
        self,
        store: UserStore,
        cache: CacheStore,
        timeout: float | None = None,
    ) -> None:
        """Initialize the health service.

        Args:
            store: The user store to ping.
            cache: The cache to ping.
            timeout: Per-check wait bound in seconds. Defaults to settings.
        """
        self._store = store
        self._cache = cache
        self._timeout = timeout or settings.health_timeout

    async def check_dependencies(self) -> tuple[bool, bool]:
        """Ping store and cache concurrently.

        Returns:
            (database_connected, redis_connected)
        """
        database_ok, redis_ok = await asyncio.gather(
            _bounded_check(self._store.health_check, self._timeout),
            _bounded_check(self._cache.health_check, self._timeout),
        )
        return database_ok, redis_ok

    async def is_ready(self) -> bool:
        """Check whether this instance can serve traffic.

        The store must be reachable and its schema in place; the store
        finishes a bootstrap that failed at startup as part of this check.
        """
        return await _bounded_check(self._store.is_ready, self._timeout)
