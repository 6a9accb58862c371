"""Repository layer for data access.

This layer hides Redis and the relational store behind protocol-based
interfaces, and hosts the cache-aside repository that combines them.

The adapters are protocol-based (structural typing), not
inheritance-based. Any class implementing the required methods will
satisfy the protocol.
"""

from autoscale_webapp.protocols import CacheStore, UserStore

from .redis_cache_store import RedisCacheStore
from .sql_user_store import SqlUserStore, users_table
from .user_repository import COLLECTION_KEY, CacheAsideUserRepository, user_key

__all__ = [
    "CacheStore",
    "UserStore",
    "RedisCacheStore",
    "SqlUserStore",
    "CacheAsideUserRepository",
    "COLLECTION_KEY",
    "user_key",
    "users_table",
]
