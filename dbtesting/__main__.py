"""Run a pytest suite against a database set up once for the whole run.

Usage:
    python -m dbtesting --setup-sql schema.sql --cleanup-sql drop.sql tests/
    python -m dbtesting --short tests/          # no database, db tests skipped
    DBTESTING_DSN=postgresql+psycopg2://user:pw@localhost/films python -m dbtesting tests/ -x
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

import dotenv
from loguru import logger

from .config import configure_logging, get_settings
from .database import sql
from .exceptions import ConfigurationError
from .lifecycle import Config, Harness


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbtesting",
        description="Run pytest with one-time database setup and per-test rollback.",
        epilog="Arguments not listed here are passed to pytest.",
        allow_abbrev=False,
    )
    parser.add_argument("--short", action="store_true", help="skip database tests entirely")
    parser.add_argument("--setup-sql", type=Path, metavar="FILE", help="SQL run once before the tests")
    parser.add_argument("--cleanup-sql", type=Path, metavar="FILE", help="SQL run once after the tests")
    parser.add_argument("--setup-timeout", type=float, metavar="SECONDS")
    parser.add_argument("--cleanup-timeout", type=float, metavar="SECONDS")
    parser.add_argument("--log-level", metavar="LEVEL", help="loguru level, default from DBTESTING_LOG_LEVEL")
    return parser


def read_statements(path: Path) -> list[str]:
    """Split a SQL file into statements on ``;``."""
    statements = [s.strip() for s in path.read_text(encoding="utf-8").split(";")]
    statements = [s for s in statements if s]
    if not statements:
        raise ValueError(f"{path} contains no SQL statements")
    return statements


def build_config(options: argparse.Namespace) -> Config:
    return Config(
        skip=(lambda: True) if options.short else None,
        setup=sql(*read_statements(options.setup_sql)) if options.setup_sql else None,
        cleanup=sql(*read_statements(options.cleanup_sql)) if options.cleanup_sql else None,
        setup_timeout=options.setup_timeout,
        cleanup_timeout=options.cleanup_timeout,
    )


def main(argv: Sequence[str] | None = None) -> int:
    dotenv.load_dotenv()

    options, pytest_args = build_parser().parse_known_args(argv)
    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging(options.log_level or "INFO")
        logger.error("Invalid settings: {}", e)
        return 2
    configure_logging(options.log_level or settings.application.log_level)

    errors = settings.validate()
    if errors:
        logger.error("Settings validation errors: {}", errors)
        return 2
    logger.debug("Settings: {}", settings.export_settings())

    try:
        config = build_config(options)
    except (OSError, ValueError) as e:
        logger.error("unable to read SQL: {}", e)
        return 2

    return Harness(config).main(pytest_args)


if __name__ == "__main__":
    sys.exit(main())
