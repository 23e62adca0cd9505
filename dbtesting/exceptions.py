from __future__ import annotations


class DbTestingError(Exception):
    """Base class for errors raised by dbtesting."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class ConfigurationError(DbTestingError):
    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message)


class DeadlineExceeded(DbTestingError, TimeoutError):
    def __init__(self, operation: str | None = None, timeout: float | None = None):
        message = "deadline exceeded"
        if timeout is not None:
            message = f"deadline exceeded after {timeout:g}s"
        super().__init__(message, operation=operation)
        self.timeout = timeout


class StateNotReadyError(DbTestingError):
    def __init__(self, message: str = "Database not initialized. Run the tests through run_tests() first."):
        super().__init__(message)


class StateAlreadySetError(DbTestingError):
    def __init__(self, message: str = "Harness state can only be set once per run"):
        super().__init__(message)
