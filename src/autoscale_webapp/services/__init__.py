"""Service layer for business logic.

Services depend on the repository and on protocols, not on Redis or
SQLAlchemy directly.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .health_service import HealthService
from .load_service import LoadService
from .user_service import UserService

__all__ = [
    "HealthService",
    "LoadService",
    "UserService",
]
