"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    """Request DTO for creating a user.

    Lengths mirror the ``users`` table columns.
    """

    name: str = Field(..., description="Display name", min_length=1, max_length=100)
    email: str = Field(
        ...,
        description="Unique contact address",
        min_length=3,
        max_length=100,
        pattern=r"^[^@\s]+@[^@\s]+$",
    )
