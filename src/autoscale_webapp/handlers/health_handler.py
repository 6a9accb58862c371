"""HTTP handlers for liveness and readiness checks."""

from datetime import datetime, timezone

from fastapi import status
from fastapi.responses import JSONResponse

from autoscale_webapp.dto import HealthResponse, ReadinessResponse
from autoscale_webapp.services import HealthService


def _state(connected: bool) -> str:
    return "connected" if connected else "disconnected"


class HealthHandler:
    """Health endpoints consumed by the orchestrator."""

    def __init__(self, health_service: HealthService) -> None:
        """Initialize the health handler.

        Args:
            health_service: Dependency checker (required).
        """
        self._health = health_service

    async def health_check(self) -> HealthResponse:
        """Handle GET /health requests.

        Always reports ``healthy``; dependency state is informational only.
        """
        database_ok, redis_ok = await self._health.check_dependencies()
        return HealthResponse(
            database=_state(database_ok),
            redis=_state(redis_ok),
            timestamp=datetime.now(timezone.utc),
        )

    async def readiness_check(self) -> JSONResponse:
        """Handle GET /ready requests.

        Returns:
            200 when the store is reachable and initialized, 503 otherwise
        """
        ready = await self._health.is_ready()
        body = ReadinessResponse(
            status="ready" if ready else "not_ready",
            database=_state(ready),
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )
