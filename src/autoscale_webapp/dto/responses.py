"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Response DTO for a single user."""

    id: int = Field(..., description="Store-assigned identity", ge=1)
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique contact address")
    created_at: datetime = Field(..., description="Store-assigned creation time")


class StressTestResponse(BaseModel):
    """Response DTO for the synthetic load endpoint."""

    message: str = Field(..., description="Human-readable status message")
    result: int = Field(..., description="Sum of 0..iterations-1")
    iterations: int = Field(..., description="Number of accumulation steps", ge=0)


class HealthResponse(BaseModel):
    """Response DTO for the liveness check.

    ``status`` is always ``healthy``; dependency fields only report state.
    """

    status: Literal["healthy"] = "healthy"
    database: Literal["connected", "disconnected"]
    redis: Literal["connected", "disconnected"]
    timestamp: datetime


class ReadinessResponse(BaseModel):
    """Response DTO for the readiness check."""

    status: Literal["ready", "not_ready"]
    database: Literal["connected", "disconnected"]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str = Field(..., description="Stable error kind for automated clients")
    message: str = Field(..., description="Human-readable detail")
