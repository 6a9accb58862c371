"""User store protocol.

Defines the interface for the authoritative relational store. Unlike the
cache, failures here always propagate as ``ServiceError`` subclasses.
"""

from typing import Protocol, runtime_checkable

from autoscale_webapp.entities import UserEntity


@runtime_checkable
class UserStore(Protocol):
    """Protocol for the durable user store."""

    def list_users(self) -> list[UserEntity]:
        """Return every user, newest first.

        Raises:
            StoreUnavailableError: If the query fails
        """
        ...

    def get_user(self, user_id: int) -> UserEntity | None:
        """Return the user with ``user_id`` or None.

        Raises:
            StoreUnavailableError: If the query fails
        """
        ...

    def insert_user(self, name: str, email: str) -> UserEntity:
        """Insert a user and return it with store-assigned id and timestamp.

        Raises:
            ConflictError: If the email is already taken
            StoreUnavailableError: On any other store failure
        """
        ...

    def health_check(self) -> bool:
        """Check if the store answers a trivial query."""
        ...

    def is_ready(self) -> bool:
        """Check if the store can serve user operations (schema in place)."""
        ...
