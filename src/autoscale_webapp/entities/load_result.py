"""Synthetic load result entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one synthetic CPU-bound run.

    Attributes:
        result: Sum of 0..iterations-1
        iterations: Number of accumulation steps performed
        duration_ms: Wall-clock time spent in the loop
    """

    result: int
    iterations: int
    duration_ms: float = 0.0
