"""JSON encoding for cached and served user payloads.

The same bytes are written to the cache and returned to callers, so the
encoding must be deterministic: compact separators and a fixed field order.
"""

import json
from typing import Any

from autoscale_webapp.entities import UserEntity


def user_to_dict(user: UserEntity) -> dict[str, Any]:
    """Convert a user to its wire representation."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "created_at": user.created_at.isoformat(),
    }


def encode_user(user: UserEntity) -> bytes:
    """Serialize a single user."""
    return json.dumps(user_to_dict(user), separators=(",", ":")).encode("utf-8")


def encode_users(users: list[UserEntity]) -> bytes:
    """Serialize an ordered collection. An empty collection becomes ``[]``."""
    return json.dumps(
        [user_to_dict(user) for user in users],
        separators=(",", ":"),
    ).encode("utf-8")
