"""SQLAlchemy implementation of UserStore.

Uses SQLAlchemy Core against a pooled engine. PostgreSQL in production;
any backend that supports ``INSERT ... RETURNING`` works (SQLite >= 3.35
is used in tests).
"""

from typing import Any

from loguru import logger
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    insert,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from autoscale_webapp.config import get_engine
from autoscale_webapp.entities import UserEntity
from autoscale_webapp.errors import ConflictError, StoreUnavailableError

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(100), nullable=False, unique=True),
    Column(
        "created_at",
        DateTime,
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
)

_COLUMNS = (
    users_table.c.id,
    users_table.c.name,
    users_table.c.email,
    users_table.c.created_at,
)

# SQLSTATE for unique_violation
_PG_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a duplicate-key error apart from other integrity failures."""
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == _PG_UNIQUE_VIOLATION
    return "unique" in str(exc.orig).lower()


def _row_to_entity(row: Any) -> UserEntity:
    return UserEntity(
        id=row.id,
        name=row.name,
        email=row.email,
        created_at=row.created_at,
    )


class SqlUserStore:
    """Relational user store.

    This class satisfies the UserStore protocol through structural
    typing. Besides the engine, whose connection pool is safe to share
    across request threads, it only remembers whether the schema has been
    created.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the store.

        Args:
            engine: Pooled SQLAlchemy engine.
        """
        self._engine = engine
        self._schema_ready = False

    @classmethod
    def create(cls) -> "SqlUserStore":
        """Factory method to create SqlUserStore from settings."""
        return cls(engine=get_engine())

    def create_schema(self) -> None:
        """Create the users table if it does not exist.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        try:
            metadata.create_all(self._engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to initialize schema", cause=e) from e
        self._schema_ready = True

    @property
    def schema_ready(self) -> bool:
        """Whether ``create_schema`` has succeeded on this store."""
        return self._schema_ready

    def list_users(self) -> list[UserEntity]:
        """Return every user, newest first (ties broken by id)."""
        query = select(*_COLUMNS).order_by(
            users_table.c.created_at.desc(),
            users_table.c.id.desc(),
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as e:
            logger.error("Store query failed (list users): {}", e)
            raise StoreUnavailableError("Failed to list users", cause=e) from e

        return [_row_to_entity(row) for row in rows]

    def get_user(self, user_id: int) -> UserEntity | None:
        """Return the user with ``user_id`` or None."""
        query = select(*_COLUMNS).where(users_table.c.id == user_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).first()
        except SQLAlchemyError as e:
            logger.error("Store query failed (get user {}): {}", user_id, e)
            raise StoreUnavailableError(f"Failed to get user {user_id}", cause=e) from e

        return _row_to_entity(row) if row is not None else None

    def insert_user(self, name: str, email: str) -> UserEntity:
        """Insert a user, returning store-generated columns in one round trip."""
        stmt = (
            insert(users_table)
            .values(name=name, email=email)
            .returning(users_table.c.id, users_table.c.created_at)
        )
        try:
            with self._engine.begin() as conn:
                row = conn.execute(stmt).one()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise ConflictError(f"Email already registered: {email}", cause=e) from e
            logger.error("Store insert rejected: {}", e)
            raise StoreUnavailableError("Failed to create user", cause=e) from e
        except SQLAlchemyError as e:
            logger.error("Store insert failed: {}", e)
            raise StoreUnavailableError("Failed to create user", cause=e) from e

        return UserEntity(id=row.id, name=name, email=email, created_at=row.created_at)

    def health_check(self) -> bool:
        """Check if the store answers ``SELECT 1``.

        Returns:
            True if healthy, False otherwise
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    def is_ready(self) -> bool:
        """Check if the store can serve user operations.

        Retries schema creation until it succeeds once, so a store that was
        down at startup becomes usable without a restart.

        Returns:
            True if the schema exists and the store answers, False otherwise
        """
        if not self._schema_ready:
            try:
                self.create_schema()
            except StoreUnavailableError as e:
                logger.warning("Store not ready, schema creation failed: {}", e.cause)
                return False
            logger.info("User schema created")
        return self.health_check()

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
