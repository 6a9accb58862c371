"""Synthetic CPU load for exercising the autoscaler.

The loop is intentionally plain Python: it holds the worker thread for its
whole duration, which is what makes the pod's CPU usage climb.
"""

import time

from autoscale_webapp.config import settings
from autoscale_webapp.entities import LoadResult


def accumulate(iterations: int) -> int:
    """Sum 0..iterations-1 one step at a time."""
    result = 0
    for i in range(iterations):
        result += i
    return result


class LoadService:
    """Runs a deterministic, bounded, CPU-bound unit of work.

    Touches neither the cache nor the store.
    """

    def __init__(self, iterations: int | None = None) -> None:
        """Initialize the load service.

        Args:
            iterations: Steps per run. Defaults to settings.stress_iterations.
        """
        self._iterations = settings.stress_iterations if iterations is None else iterations
        if self._iterations < 0:
            raise ValueError("iterations must be non-negative")

    def run_load(self, iterations: int | None = None) -> LoadResult:
        """Perform one synchronous accumulation run.

        Args:
            iterations: Override the configured step count

        Returns:
            LoadResult with the accumulated value and the step count
        """
        iterations = self._iterations if iterations is None else iterations
        if iterations < 0:
            raise ValueError("iterations must be non-negative")

        start_time = time.perf_counter()
        result = accumulate(iterations)
        duration_ms = (time.perf_counter() - start_time) * 1000

        return LoadResult(result=result, iterations=iterations, duration_ms=duration_ms)

    @property
    def iterations(self) -> int:
        """Get the configured step count."""
        return self._iterations
