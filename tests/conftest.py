import pytest
from sqlalchemy import create_engine

from dbtesting.config import SettingsManager, configure_logging

from .test_utilities import FILMS_DDL, EngineMockBuilder

pytest_plugins = ["pytester"]


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Configure logging for tests."""
    from loguru import logger

    configure_logging("DEBUG")

    yield

    # Cleanup
    logger.remove()


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Start every test from a clean environment and settings singleton."""
    for name in ("DSN", "SHORT", "SETUP_TIMEOUT", "CLEANUP_TIMEOUT", "LOG_LEVEL", "LOG_PREFIX"):
        monkeypatch.delenv(f"DBTESTING_{name}", raising=False)
    SettingsManager.reset_instance()
    yield
    SettingsManager.reset_instance()


@pytest.fixture
def sqlite_url(tmp_path):
    """SQLite file database, so several connections share one database."""
    return f"sqlite:///{tmp_path / 'films.db'}"


@pytest.fixture
def sqlite_engine(sqlite_url):
    engine = create_engine(sqlite_url, connect_args={"check_same_thread": False})
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def films_engine(sqlite_engine):
    """Engine with the films table created."""
    with sqlite_engine.begin() as conn:
        conn.exec_driver_sql(FILMS_DDL)
    return sqlite_engine


@pytest.fixture
def mock_engine():
    return EngineMockBuilder().build()
