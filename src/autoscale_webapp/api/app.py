from contextlib import AbstractAsyncContextManager
from typing import Any, Callable

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from autoscale_webapp.api.dependencies import (
    HealthHandlerDep,
    StressHandlerDep,
    UserHandlerDep,
    lifespan,
)
from autoscale_webapp.api.errors import register_exception_handlers
from autoscale_webapp.config import settings
from autoscale_webapp.dto import (
    CreateUserRequest,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
    StressTestResponse,
    UserResponse,
)

API_TITLE = "Autoscale Webapp API"
API_VERSION = "0.1.0"
API_DESCRIPTION = "User API with Redis cache-aside reads and a CPU stress endpoint for HPA testing"

_ERRORS: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


def create_app(
    app_lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]] | None = lifespan,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_lifespan: Startup/shutdown context. Tests pass None and wire
            app.state themselves with ``install_services``.
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=app_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "endpoints": {
                "users": "/api/users",
                "stress": "/api/stress",
                "health": "/health",
                "ready": "/ready",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthResponse)
    async def health(handler: HealthHandlerDep) -> HealthResponse:
        """Liveness check. Reports dependency state, never fails."""
        return await handler.health_check()

    @app.get(
        "/ready",
        response_model=ReadinessResponse,
        responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
    )
    async def ready(handler: HealthHandlerDep) -> Response:
        """Readiness check. 503 until the database is reachable and initialized."""
        return await handler.readiness_check()

    # Sync endpoints run in the threadpool: one worker thread per request.
    @app.get("/api/users", response_model=list[UserResponse], responses=_ERRORS)
    def list_users(handler: UserHandlerDep) -> Response:
        """List all users, newest first."""
        return handler.list_users()

    @app.post(
        "/api/users",
        response_model=UserResponse,
        status_code=status.HTTP_201_CREATED,
        responses={**_ERRORS, status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
    )
    def create_user(request: CreateUserRequest, handler: UserHandlerDep) -> Response:
        """Create a user and invalidate the cached collection."""
        return handler.create_user(request)

    @app.get(
        "/api/users/{user_id}",
        response_model=UserResponse,
        responses={**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    )
    def get_user(user_id: str, handler: UserHandlerDep) -> Response:
        """Get a single user by id."""
        return handler.get_user(user_id)

    @app.get("/api/stress", response_model=StressTestResponse)
    async def stress(handler: StressHandlerDep) -> StressTestResponse:
        """Burn CPU on a worker thread for the HPA to observe."""
        return await handler.run()

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "autoscale_webapp.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
