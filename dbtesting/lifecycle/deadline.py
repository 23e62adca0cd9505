import time
from threading import Event, Thread
from typing import Any, Callable, TypeVar

from ..exceptions import DeadlineExceeded

T = TypeVar("T")


class Deadline:
    """A cancellable point in time bounding one or more operations.

    Setup and cleanup functions receive the deadline they run under. Long
    running ones should call ``check()`` between steps so they stop once the
    orchestrator has given up on them.
    """

    timeout: float
    operation: str

    def __init__(self, timeout: float, operation: str = "operation"):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}")
        self.timeout = timeout
        self.operation = operation
        self._expires_at = time.monotonic() + timeout
        self._cancelled = Event()

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() == 0.0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def check(self) -> None:
        """Raise DeadlineExceeded if the deadline expired or was cancelled."""
        if self.cancelled or self.expired:
            raise DeadlineExceeded(self.operation, self.timeout)

    def run(self, func: Callable[..., T], *args: Any, operation: str | None = None, inline: bool = False) -> T:
        """Run ``func(*args)`` and give up on it once the deadline expires.

        By default ``func`` runs on a daemon worker thread. Exceeding the
        deadline cancels it and raises DeadlineExceeded; the worker is
        abandoned and does not hold up interpreter exit.

        With ``inline=True`` it runs on the calling thread, for engines whose
        connections are bound to a thread. The deadline is then only enforced
        through ``check()``, before the call and once it returns.

        Exceptions raised by ``func`` propagate unchanged.
        """
        operation = operation or self.operation
        self.check()

        if inline:
            result = func(*args)
            self._check_after(operation)
            return result

        done = Event()
        outcome: dict[str, Any] = {}

        def work() -> None:
            try:
                outcome["result"] = func(*args)
            except BaseException as e:
                outcome["error"] = e
            finally:
                done.set()

        Thread(target=work, name=f"dbtesting-{operation}", daemon=True).start()
        if not done.wait(self.remaining()):
            self.cancel()
            raise DeadlineExceeded(operation, self.timeout)

        if "error" in outcome:
            raise outcome["error"]
        return outcome["result"]

    def _check_after(self, operation: str) -> None:
        if self.cancelled or self.expired:
            self.cancel()
            raise DeadlineExceeded(operation, self.timeout)
