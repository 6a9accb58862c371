"""Domain entities for internal representation.

These are pure frozen dataclasses used internally by services and
repositories. They are NOT used for API contracts - use DTOs from the
dto package for that.
"""

from .cache_lookup import CacheDegraded, CacheHit, CacheLookup, CacheMiss
from .load_result import LoadResult
from .user import UserEntity

__all__ = [
    "CacheDegraded",
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "LoadResult",
    "UserEntity",
]
