"""Database-backed test runs with one rolled back transaction per test."""

from .database import create_all, drop_all, sql
from .exceptions import (
    ConfigurationError,
    DbTestingError,
    DeadlineExceeded,
    StateAlreadySetError,
    StateNotReadyError,
)
from .lifecycle import (
    Config,
    Deadline,
    Harness,
    HarnessState,
    Injector,
    IsolatedTest,
    PytestRunner,
    SuiteRunner,
    inject,
    run_tests,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "DbTestingError",
    "Deadline",
    "DeadlineExceeded",
    "Harness",
    "HarnessState",
    "Injector",
    "IsolatedTest",
    "PytestRunner",
    "StateAlreadySetError",
    "StateNotReadyError",
    "SuiteRunner",
    "create_all",
    "drop_all",
    "inject",
    "run_tests",
    "sql",
]
