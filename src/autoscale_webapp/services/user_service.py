"""User service for request-level validation and orchestration."""

from loguru import logger

from autoscale_webapp.entities import UserEntity
from autoscale_webapp.errors import BadInputError
from autoscale_webapp.repositories import CacheAsideUserRepository

# PostgreSQL INTEGER upper bound; larger ids can never exist.
MAX_USER_ID = 2_147_483_647


class UserService:
    """Validates caller input and delegates to the cache-aside repository.

    Example:
        ```python
        service = UserService(repository=repository)
        user = service.create_user("Ada", "ada@example.com")
        payload = service.get_user("1")
        ```
    """

    def __init__(self, repository: CacheAsideUserRepository) -> None:
        """Initialize the user service.

        Args:
            repository: Cache-aside repository (required).
        """
        self._repository = repository

    @staticmethod
    def parse_user_id(raw: str) -> int:
        """Parse a path identity.

        Raises:
            BadInputError: If ``raw`` is not a decimal integer in 1..MAX_USER_ID
        """
        if not (raw.isascii() and raw.isdigit()):
            raise BadInputError("Invalid user ID")
        user_id = int(raw)
        if not 1 <= user_id <= MAX_USER_ID:
            raise BadInputError("Invalid user ID")
        return user_id

    def list_users(self) -> bytes:
        """Return all users, newest first, as serialized JSON."""
        return self._repository.read_collection()

    def get_user(self, raw_id: str) -> bytes:
        """Return one user as serialized JSON.

        Raises:
            BadInputError: If the identity is malformed
            NotFoundError: If no such user exists
        """
        return self._repository.read_by_identity(self.parse_user_id(raw_id))

    def create_user(self, name: str, email: str) -> UserEntity:
        """Create a user.

        Raises:
            BadInputError: If the name is blank or the email has no ``@``
            ConflictError: If the email is already registered
        """
        if not name.strip():
            raise BadInputError("Name must not be blank")
        if "@" not in email:
            raise BadInputError("Email must contain '@'")

        user = self._repository.create(name=name, email=email)
        logger.info("Created user {} ({})", user.id, user.email)
        return user
