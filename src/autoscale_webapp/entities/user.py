"""User domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserEntity:
    """Domain entity for a stored user.

    ``id`` and ``created_at`` are assigned by the store at insert time and
    never change afterwards.

    Attributes:
        id: Store-generated identity
        name: Display name
        email: Unique contact address
        created_at: Insert timestamp assigned by the store
    """

    id: int
    name: str
    email: str
    created_at: datetime
