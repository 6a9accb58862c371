"""Cache-aside repository for users.

Reads prefer the cache and fall back to the store; writes go to the store
and then invalidate the collection entry. The cache is a pure accelerator:
any cache failure only disables the fast path for the current call, while
store failures always propagate.

Keys:
    users:all    the full collection, newest first
    user:{id}    a single user
"""

from loguru import logger

from autoscale_webapp.config import settings
from autoscale_webapp.entities import CacheHit, UserEntity
from autoscale_webapp.errors import NotFoundError
from autoscale_webapp.protocols import CacheStore, UserStore
from autoscale_webapp.repositories.codec import encode_user, encode_users

COLLECTION_KEY = "users:all"


def user_key(user_id: int) -> str:
    """Cache key for a single user."""
    return f"user:{user_id}"


class CacheAsideUserRepository:
    """Mediates every user read and write between store and cache.

    Payloads are returned as the exact serialized bytes that were (or
    would be) cached, so a cache hit is served without re-encoding.

    Example:
        ```python
        repository = CacheAsideUserRepository(
            store=SqlUserStore.create(),
            cache=RedisCacheStore.create(),
        )
        payload = repository.read_collection()
        ```
    """

    def __init__(
        self,
        store: UserStore,
        cache: CacheStore,
        ttl: int | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Authoritative user store (required).
            cache: Expiring cache in front of the store (required).
            ttl: Cache entry time-to-live in seconds. Defaults to settings.
        """
        self._store = store
        self._cache = cache
        self._ttl = ttl or settings.cache_ttl

    def read_collection(self) -> bytes:
        """Return every user, newest first, as a JSON array.

        Returns:
            The cached payload on hit, otherwise a freshly queried one

        Raises:
            StoreUnavailableError: If the cache cannot serve and the store fails
        """
        lookup = self._cache.get(COLLECTION_KEY)
        if isinstance(lookup, CacheHit):
            return lookup.value

        payload = encode_users(self._store.list_users())
        self._populate(COLLECTION_KEY, payload)
        return payload

    def read_by_identity(self, user_id: int) -> bytes:
        """Return a single user as a JSON object.

        Raises:
            NotFoundError: If the store has no row for ``user_id``
            StoreUnavailableError: If the cache cannot serve and the store fails
        """
        key = user_key(user_id)
        lookup = self._cache.get(key)
        if isinstance(lookup, CacheHit):
            return lookup.value

        user = self._store.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        payload = encode_user(user)
        self._populate(key, payload)
        return payload

    def create(self, name: str, email: str) -> UserEntity:
        """Insert a user, then invalidate the collection entry.

        The insert must commit before invalidation is attempted, so a failed
        insert never evicts a still-valid collection entry.

        Raises:
            ConflictError: If the email is already registered
            StoreUnavailableError: On any other store failure
        """
        user = self._store.insert_user(name=name, email=email)

        if not self._cache.delete(COLLECTION_KEY):
            # Next collection read may be stale for up to one TTL.
            logger.warning("Collection invalidation skipped after creating user {}", user.id)

        return user

    def _populate(self, key: str, payload: bytes) -> None:
        """Best-effort write-back; failures are logged by the cache store."""
        self._cache.set(key, payload, self._ttl)

    @property
    def ttl(self) -> int:
        """Get the cache entry time-to-live in seconds."""
        return self._ttl
