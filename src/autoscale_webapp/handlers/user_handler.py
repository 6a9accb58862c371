"""HTTP handlers for user operations.

Handlers convert between DTOs (API contracts) and service calls. Service
errors propagate unchanged; the API layer maps them to status codes.
"""

from fastapi import Response, status

from autoscale_webapp.dto import CreateUserRequest
from autoscale_webapp.repositories.codec import encode_user
from autoscale_webapp.services import UserService

JSON_MEDIA_TYPE = "application/json"


class UserHandler:
    """HTTP handlers for the users collection.

    Read paths return the repository's serialized bytes verbatim, so a cache
    hit is written to the socket without decoding.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize the user handler.

        Args:
            user_service: The user service for business logic (required).
        """
        self._users = user_service

    def list_users(self) -> Response:
        """Handle GET /api/users requests."""
        return Response(content=self._users.list_users(), media_type=JSON_MEDIA_TYPE)

    def get_user(self, user_id: str) -> Response:
        """Handle GET /api/users/{id} requests.

        Args:
            user_id: Raw path segment, validated by the service
        """
        return Response(content=self._users.get_user(user_id), media_type=JSON_MEDIA_TYPE)

    def create_user(self, request: CreateUserRequest) -> Response:
        """Handle POST /api/users requests.

        Returns:
            201 with the created user, encoded the same way as reads
        """
        user = self._users.create_user(name=request.name, email=request.email)
        return Response(
            content=encode_user(user),
            status_code=status.HTTP_201_CREATED,
            media_type=JSON_MEDIA_TYPE,
        )
