"""Cache lookup results.

Every cache read resolves to exactly one of three outcomes. Callers treat
``CacheMiss`` and ``CacheDegraded`` the same way (fall through to the
store); the distinction only matters for logging and health reporting.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheHit:
    """The key was present and not expired."""

    value: bytes


@dataclass(frozen=True)
class CacheMiss:
    """The key was absent or expired."""


@dataclass(frozen=True)
class CacheDegraded:
    """The cache could not be consulted (connection refused, timeout, ...)."""

    reason: str


CacheLookup = CacheHit | CacheMiss | CacheDegraded
