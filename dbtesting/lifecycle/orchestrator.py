from typing import Protocol, runtime_checkable

from sqlalchemy import Engine
from sqlalchemy.pool import SingletonThreadPool

from ..database import ping
from .deadline import Deadline
from .options import Config, Logger
from .state import HarnessState

EXIT_SETUP_FAILED = 1


@runtime_checkable
class SuiteRunner(Protocol):
    """Anything that runs the tests and reports an exit code."""

    def run(self) -> int: ...


def run_tests(runner: SuiteRunner, config: Config | None = None, state: HarnessState | None = None) -> int:
    """Run ``runner`` against a freshly set up database.

    Setup is all-or-nothing: if connecting, the liveness probe or the setup
    function fails (or the setup deadline expires), the runner is never
    started and the exit code is non-zero. Cleanup is best-effort: it always
    runs once the runner has been started, and its failures are logged but
    never change the exit code.

    Args:
        runner: Runs the tests and returns their exit code
        config: Customization points, defaults applied to unset fields
        state: Receives the skip decision and the engine; tests read it

    Returns:
        The runner's exit code, or 1 if setup failed
    """
    cfg = (config or Config()).with_defaults()
    state = state if state is not None else HarnessState()
    log = cfg.logger

    skip = cfg.skip()
    state.record_skip(skip)
    if skip:
        log.info("Skipping database setup, running tests in short mode")
        return int(runner.run())

    try:
        engine = cfg.connect()
    except Exception as e:
        log.error("unable to connect: {}", e)
        return EXIT_SETUP_FAILED

    if not _set_up(engine, cfg, log):
        _dispose(engine, log)
        return EXIT_SETUP_FAILED

    state.publish(engine)

    try:
        return int(runner.run())
    finally:
        _clean_up(engine, cfg, log)
        _dispose(engine, log)


def _thread_bound(engine: Engine) -> bool:
    # SingletonThreadPool (in-memory SQLite) gives every thread its own database.
    return isinstance(getattr(engine, "pool", None), SingletonThreadPool)


def _set_up(engine: Engine, cfg: Config, log: Logger) -> bool:
    inline = _thread_bound(engine)

    try:
        # Probe and setup share one deadline.
        deadline = Deadline(cfg.setup_timeout, operation="setup")
    except ValueError as e:
        log.error("setup: {}", e)
        return False

    try:
        deadline.run(ping, engine, operation="ping", inline=inline)
    except Exception as e:
        log.error("ping: {}", e)
        return False

    try:
        deadline.run(cfg.setup, deadline, engine, operation="setup", inline=inline)
    except Exception as e:
        log.error("setup: {}", e)
        return False

    log.info("Database setup complete")
    return True


def _clean_up(engine: Engine, cfg: Config, log: Logger) -> None:
    try:
        deadline = Deadline(cfg.cleanup_timeout, operation="cleanup")
        deadline.run(cfg.cleanup, deadline, engine, operation="cleanup", inline=_thread_bound(engine))
    except Exception as e:
        log.warning("cleanup: {}", e)


def _dispose(engine: Engine, log: Logger) -> None:
    try:
        engine.dispose()
    except Exception as e:
        log.warning("engine.dispose: {}", e)
