"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Clients built once in the lifespan and passed down explicitly
    - Dependency functions retrieve handlers from request.app.state
    - Clients released on shutdown
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from loguru import logger

from autoscale_webapp.config import configure_logging, settings
from autoscale_webapp.errors import StoreUnavailableError
from autoscale_webapp.handlers import HealthHandler, StressHandler, UserHandler
from autoscale_webapp.protocols import CacheStore, UserStore
from autoscale_webapp.repositories import (
    CacheAsideUserRepository,
    RedisCacheStore,
    SqlUserStore,
)
from autoscale_webapp.services import HealthService, LoadService, UserService


def install_services(
    app: FastAPI,
    store: UserStore,
    cache: CacheStore,
    load_service: LoadService | None = None,
) -> None:
    """Wire repository, services and handlers onto ``app.state``.

    Args:
        app: The FastAPI application instance
        store: Authoritative user store
        cache: Expiring cache
        load_service: Synthetic load unit. Defaults to configured iterations.
    """
    repository = CacheAsideUserRepository(store=store, cache=cache)
    user_service = UserService(repository=repository)
    health_service = HealthService(store=store, cache=cache)

    app.state.user_handler = UserHandler(user_service=user_service)
    app.state.stress_handler = StressHandler(load_service=load_service or LoadService())
    app.state.health_handler = HealthHandler(health_service=health_service)


def _get_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_user_handler(request: Request) -> UserHandler:
    """Dependency injection for UserHandler from app.state."""
    return _get_state(request, "user_handler")


def get_stress_handler(request: Request) -> StressHandler:
    """Dependency injection for StressHandler from app.state."""
    return _get_state(request, "stress_handler")


def get_health_handler(request: Request) -> HealthHandler:
    """Dependency injection for HealthHandler from app.state."""
    return _get_state(request, "health_handler")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Startup:
        1. Store client (pooled engine), schema bootstrap
        2. Cache client (pooled Redis connection)
        3. Repository, services and handlers in app.state

    A store or cache that is down at startup does not prevent the process
    from starting; readiness reports it instead.
    """
    configure_logging()
    logger.info("Starting autoscale-webapp API...")
    logger.info("Cache TTL: {}s, stress iterations: {}", settings.cache_ttl, settings.stress_iterations)

    store = SqlUserStore.create()
    try:
        store.create_schema()
        logger.info("Database initialized successfully")
    except StoreUnavailableError as e:
        logger.error("Database connection failed, readiness will retry: {}", e.cause)

    cache = RedisCacheStore.create()
    if cache.health_check():
        logger.info("Redis connected successfully")
    else:
        logger.warning("Redis connection failed; serving from the database only")

    install_services(app, store=store, cache=cache)

    yield

    del app.state.user_handler
    del app.state.stress_handler
    del app.state.health_handler
    cache.close()
    store.close()
    logger.info("autoscale-webapp API shut down")


# Type aliases for cleaner dependency injection
UserHandlerDep = Annotated[UserHandler, Depends(get_user_handler)]
StressHandlerDep = Annotated[StressHandler, Depends(get_stress_handler)]
HealthHandlerDep = Annotated[HealthHandler, Depends(get_health_handler)]
