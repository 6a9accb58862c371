"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .health_handler import HealthHandler
from .stress_handler import StressHandler
from .user_handler import UserHandler

__all__ = [
    "HealthHandler",
    "StressHandler",
    "UserHandler",
]
