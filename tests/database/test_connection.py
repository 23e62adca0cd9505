"""Unit tests for the default connect function and the liveness probe."""

import pytest
from sqlalchemy import Engine
from sqlalchemy.exc import OperationalError

from dbtesting.database import default_connect, get_connection_string, parse_dsn, ping
from dbtesting.exceptions import ConfigurationError


@pytest.mark.unit
@pytest.mark.parametrize(
    "dsn, expected",
    [
        ("sqlite:///films.db", ("sqlite", "///films.db")),
        ("postgresql+psycopg2://u:p@host:5432/db", ("postgresql+psycopg2", "//u:p@host:5432/db")),
        ("postgres:host=localhost dbname=x", ("postgres", "host=localhost dbname=x")),
    ],
)
def test_parse_dsn(dsn, expected):
    assert parse_dsn(dsn) == expected


@pytest.mark.unit
@pytest.mark.parametrize("dsn", ["", "sqlite", ":///films.db", "sqlite:"])
def test_parse_dsn_malformed(dsn):
    with pytest.raises(ConfigurationError, match='expected DBTESTING_DSN="DRIVER:DSN_INFORMATION"'):
        parse_dsn(dsn)


@pytest.mark.unit
def test_get_connection_string_missing_variable():
    with pytest.raises(ConfigurationError, match="expected environment variable: DBTESTING_DSN"):
        get_connection_string()


@pytest.mark.unit
def test_default_connect_from_environment(monkeypatch, sqlite_url):
    monkeypatch.setenv("DBTESTING_DSN", sqlite_url)

    engine = default_connect()
    try:
        assert isinstance(engine, Engine)
        assert engine.url.drivername == "sqlite"
    finally:
        engine.dispose()


@pytest.mark.unit
def test_default_connect_malformed(monkeypatch):
    monkeypatch.setenv("DBTESTING_DSN", "films.db")

    with pytest.raises(ConfigurationError):
        default_connect()


@pytest.mark.integration
def test_ping(sqlite_engine):
    ping(sqlite_engine)


@pytest.mark.integration
def test_ping_unreachable(tmp_path):
    from sqlalchemy import create_engine

    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'films.db'}")
    try:
        with pytest.raises(OperationalError):
            ping(engine)
    finally:
        engine.dispose()
