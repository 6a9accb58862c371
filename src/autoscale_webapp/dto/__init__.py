"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal domain logic should use entities from the entities package.
"""

from .requests import CreateUserRequest
from .responses import (
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
    StressTestResponse,
    UserResponse,
)

__all__ = [
    "CreateUserRequest",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
    "StressTestResponse",
    "UserResponse",
]
