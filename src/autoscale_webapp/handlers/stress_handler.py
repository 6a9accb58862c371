"""HTTP handler for the synthetic load endpoint."""

import asyncio

from loguru import logger

from autoscale_webapp.config import settings
from autoscale_webapp.dto import StressTestResponse
from autoscale_webapp.services import LoadService


class StressHandler:
    """Runs one load unit per request on a worker thread.

    At most ``concurrency`` runs execute at once; further requests wait
    for a slot, so the event loop keeps enough of the interpreter to
    answer health checks while the pod is saturated.
    """

    def __init__(self, load_service: LoadService, concurrency: int | None = None) -> None:
        """Initialize the stress handler.

        Args:
            load_service: The synthetic load unit.
            concurrency: Simultaneous runs allowed. Defaults to settings.
        """
        self._load = load_service
        self._concurrency = settings.stress_concurrency if concurrency is None else concurrency
        if self._concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._slots = asyncio.Semaphore(self._concurrency)

    async def run(self) -> StressTestResponse:
        """Handle GET /api/stress requests."""
        async with self._slots:
            outcome = await asyncio.to_thread(self._load.run_load)

        logger.debug("Stress run: {} iterations in {:.1f}ms", outcome.iterations, outcome.duration_ms)
        return StressTestResponse(
            message="Stress test completed",
            result=outcome.result,
            iterations=outcome.iterations,
        )
