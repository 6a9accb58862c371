import os
import sys
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv
from loguru import logger
from redis.backoff import NoBackoff
from redis.retry import Retry
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

load_dotenv()


def _default_database_url() -> str:
    """Build a PostgreSQL URL from the discrete DB_* variables."""
    return "postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}".format(
        user=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD", "postgres"),
        host=os.getenv("DB_HOST", "localhost"),
        port=os.getenv("DB_PORT", "5432"),
        name=os.getenv("DB_NAME", "webapp"),
    )


def _default_redis_url() -> str:
    """Build a Redis URL from REDIS_HOST / REDIS_PORT / REDIS_DB."""
    host = os.getenv("REDIS_HOST", "localhost")
    port = os.getenv("REDIS_PORT", "6379")
    db = os.getenv("REDIS_DB", "0")
    return f"redis://{host}:{port}/{db}"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Store
    database_url: str = os.getenv("DATABASE_URL") or _default_database_url()
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    db_pool_timeout: float = float(os.getenv("DB_POOL_TIMEOUT", "5"))
    db_connect_timeout: int = int(os.getenv("DB_CONNECT_TIMEOUT", "3"))
    db_statement_timeout_ms: int = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))

    # Redis
    redis_url: str = os.getenv("REDIS_URL") or _default_redis_url()
    redis_password: str | None = os.getenv("REDIS_PASSWORD") or None
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "0.5"))
    redis_max_connections: int = int(os.getenv("REDIS_MAX_CONNECTIONS", "50"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "300"))  # 5 minutes

    # Synthetic load
    stress_iterations: int = int(os.getenv("STRESS_ITERATIONS", "100000000"))
    stress_concurrency: int = int(os.getenv("STRESS_CONCURRENCY", "2"))

    # Health checks
    health_timeout: float = float(os.getenv("HEALTH_TIMEOUT", "2.0"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    @property
    def is_postgres(self) -> bool:
        """Check if the configured store is PostgreSQL."""
        return self.database_url.startswith("postgresql")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.stress_iterations < 0:
            raise ValueError(
                f"STRESS_ITERATIONS must be non-negative, got {self.stress_iterations}"
            )

        if self.stress_concurrency < 1:
            raise ValueError("STRESS_CONCURRENCY must be at least 1")

        if self.health_timeout <= 0:
            raise ValueError("HEALTH_TIMEOUT must be positive")

        if self.redis_socket_timeout <= 0:
            raise ValueError("REDIS_SOCKET_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None, serialize: bool | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or settings.log_level,
        serialize=settings.log_json if serialize is None else serialize,
        backtrace=False,
        diagnose=False,
    )


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client with bounded socket timeouts.

    The client owns a thread-safe connection pool; build it once per process.
    Retries are disabled so an outage costs at most one socket timeout.
    """
    config = config or settings
    pool = redis.ConnectionPool.from_url(
        config.redis_url,
        password=config.redis_password,
        socket_timeout=config.redis_socket_timeout,
        socket_connect_timeout=config.redis_socket_timeout,
        max_connections=config.redis_max_connections,
        retry=Retry(NoBackoff(), 0),
        decode_responses=False,
    )
    return redis.Redis(connection_pool=pool, retry=Retry(NoBackoff(), 0))


def get_engine(config: Settings | None = None) -> Engine:
    """Create the pooled SQLAlchemy engine for the user store."""
    config = config or settings
    connect_args: dict = {}
    if config.is_postgres:
        connect_args = {
            "connect_timeout": config.db_connect_timeout,
            "options": f"-c statement_timeout={config.db_statement_timeout_ms}",
        }

    return create_engine(
        config.database_url,
        poolclass=QueuePool,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_pre_ping=True,
        pool_recycle=1800,
        connect_args=connect_args,
    )
