"""Protocol interfaces for swappable implementations.

Protocols use structural typing, so any class with matching methods
satisfies them. This keeps the cache-aside repository independent of
Redis and SQLAlchemy and lets tests substitute in-memory fakes.
"""

from .cache_store import CacheStore
from .user_store import UserStore

__all__ = [
    "CacheStore",
    "UserStore",
]
