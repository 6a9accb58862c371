"""Autoscale Webapp - cache-aside user API with a CPU stress endpoint.

This package provides a layered architecture for a horizontally scaled
request tier in front of PostgreSQL and Redis:

Layers:
    - protocols: Interface contracts (UserStore, CacheStore)
    - repositories: Store/cache adapters and the cache-aside repository
    - services: Business logic (users, synthetic load, health)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from autoscale_webapp.repositories import (
        CacheAsideUserRepository,
        RedisCacheStore,
        SqlUserStore,
    )

    repository = CacheAsideUserRepository(
        store=SqlUserStore.create(),
        cache=RedisCacheStore.create(),
    )
    ```

For HTTP API:
    ```python
    from autoscale_webapp.api.app import app
    ```
"""

from autoscale_webapp.config import get_engine, get_redis_client, settings
from autoscale_webapp.entities import LoadResult, UserEntity
from autoscale_webapp.errors import (
    BadInputError,
    ConflictError,
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
)
from autoscale_webapp.protocols import CacheStore, UserStore
from autoscale_webapp.repositories import (
    CacheAsideUserRepository,
    RedisCacheStore,
    SqlUserStore,
)
from autoscale_webapp.services import HealthService, LoadService, UserService

__all__ = [
    # Configuration
    "settings",
    "get_engine",
    "get_redis_client",
    # Errors
    "ServiceError",
    "BadInputError",
    "NotFoundError",
    "ConflictError",
    "StoreUnavailableError",
    # Protocols (interfaces)
    "CacheStore",
    "UserStore",
    # Repositories (data access)
    "CacheAsideUserRepository",
    "RedisCacheStore",
    "SqlUserStore",
    # Services (business logic)
    "HealthService",
    "LoadService",
    "UserService",
    # Entities (domain models)
    "LoadResult",
    "UserEntity",
]
