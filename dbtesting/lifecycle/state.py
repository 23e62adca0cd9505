from threading import Lock

from sqlalchemy import Engine

from ..exceptions import StateAlreadySetError, StateNotReadyError


class HarnessState:
    """Skip decision and shared engine for one test run.

    Written at most twice by the orchestrator before any test starts, then
    only read. Reads do not lock: every write happens before the runner is
    started.
    """

    def __init__(self):
        self._skip: bool | None = None
        self._engine: Engine | None = None
        self._write_lock = Lock()

    def record_skip(self, skip: bool) -> None:
        with self._write_lock:
            if self._skip is not None:
                raise StateAlreadySetError("Skip decision already recorded")
            self._skip = bool(skip)

    def publish(self, engine: Engine) -> None:
        with self._write_lock:
            if self._skip is None:
                raise StateNotReadyError("Skip decision must be recorded before publishing an engine")
            if self._skip:
                raise StateAlreadySetError("Cannot publish an engine for a skipped run")
            if self._engine is not None:
                raise StateAlreadySetError("Engine already published")
            self._engine = engine

    @property
    def ready(self) -> bool:
        """Whether tests may run: skipping, or an engine is published."""
        return self._skip is True or self._engine is not None

    @property
    def skip(self) -> bool:
        if self._skip is None:
            raise StateNotReadyError()
        return self._skip

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StateNotReadyError()
        return self._engine

    def __repr__(self) -> str:
        return f"HarnessState(skip={self._skip!r}, engine={self._engine!r})"
