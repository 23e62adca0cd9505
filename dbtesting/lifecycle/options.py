from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Protocol

from sqlalchemy import Engine

from ..config import get_default_logger, get_settings
from ..database import LifecycleFunc, default_connect, noop


class Logger(Protocol):
    """The subset of the loguru logger used by the harness."""

    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...


def default_skip() -> bool:
    """Skip database tests when short mode is on."""
    return get_settings().harness.short


@dataclass(frozen=True)
class Config:
    """Customization points for a test run.

    Any field left as ``None`` is filled in by ``with_defaults()``.
    """

    connect: Callable[[], Engine] | None = None
    skip: Callable[[], bool] | None = None
    setup: LifecycleFunc | None = None
    cleanup: LifecycleFunc | None = None
    setup_timeout: float | None = None
    cleanup_timeout: float | None = None
    logger: Logger | None = None

    def with_defaults(self) -> Config:
        """Return a copy with every unset field filled in.

        Timeouts and the log prefix come from the settings manager, which
        reads the environment once.
        """
        settings = get_settings()
        return replace(
            self,
            connect=self.connect or default_connect,
            skip=self.skip or default_skip,
            setup=self.setup or noop,
            cleanup=self.cleanup or noop,
            setup_timeout=self.setup_timeout or settings.harness.setup_timeout,
            cleanup_timeout=self.cleanup_timeout or settings.harness.cleanup_timeout,
            logger=self.logger or get_default_logger(settings.application.log_prefix),
        )
