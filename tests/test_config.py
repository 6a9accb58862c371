"""
Tests for settings validation and client factories.
"""

import io
import json
import sys

import pytest
from loguru import logger

from autoscale_webapp.config import Settings, configure_logging, get_engine
from autoscale_webapp.repositories import SqlUserStore


def test_defaults_are_valid():
    config = Settings()
    assert config.cache_ttl > 0
    assert config.stress_iterations >= 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_ttl": 0},
        {"stress_iterations": -1},
        {"stress_concurrency": 0},
        {"health_timeout": 0},
        {"redis_socket_timeout": -1.0},
    ],
)
def test_invalid_settings(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_is_postgres():
    assert Settings(database_url="postgresql+psycopg2://u:p@db:5432/webapp").is_postgres
    assert not Settings(database_url="sqlite:///users.db").is_postgres


def test_engine_factory(tmp_path):
    """The pooled engine works end to end against a file database."""
    engine = get_engine(Settings(database_url=f"sqlite:///{tmp_path}/users.db"))
    store = SqlUserStore(engine=engine)

    store.create_schema()
    user = store.insert_user("Ada", "ada@example.com")

    assert store.get_user(user.id) == user
    store.close()


def test_configure_logging_serialize(monkeypatch):
    buffer = io.StringIO()
    monkeypatch.setattr(sys, "stderr", buffer)
    configure_logging(level="INFO", serialize=True)
    logger.info("structured line")
    monkeypatch.undo()
    configure_logging()

    record = json.loads(buffer.getvalue().splitlines()[-1])
    assert record["record"]["message"] == "structured line"
    assert record["record"]["level"]["name"] == "INFO"
