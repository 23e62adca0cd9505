"""Transaction-per-test isolation.

Every test gets its own connection with an open transaction. The transaction
is always rolled back when the test finishes, so writes never leak into other
tests and no test needs a teardown of its own.
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator

import pytest
from sqlalchemy import Connection, Engine, RootTransaction
from sqlalchemy.orm import Session

from .options import Logger
from .state import HarnessState

TestBody = Callable[["IsolatedTest"], Any]
INJECTOR_FIXTURE = "dbtesting_injector"


class IsolatedTest:
    """What a test body gets: the pytest request and its own transaction.

    ``tx`` is a connection inside an open transaction. Run every statement
    through it (or through ``session``); the raw engine is not isolated.
    Never commit or roll back ``tx`` yourself.
    """

    request: pytest.FixtureRequest
    tx: Connection

    def __init__(self, request: pytest.FixtureRequest, tx: Connection, logger: Logger):
        self.request = request
        self.tx = tx
        self._logger = logger
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        """ORM session bound to ``tx``.

        ``session.commit()`` does not end the test's transaction.
        """
        if self._session is None:
            self._session = Session(bind=self.tx, join_transaction_mode="rollback_only")
        return self._session

    @property
    def name(self) -> str:
        return self.request.node.name

    def fail(self, reason: str) -> None:
        pytest.fail(reason)

    def skip(self, reason: str = "") -> None:
        pytest.skip(reason)

    def log(self, message: str, *args: Any) -> None:
        self._logger.info("[{}] " + message, self.name, *args)

    def _close_session(self) -> None:
        if self._session is not None:
            self._session.close()


class Injector:
    """Builds isolated test contexts against a harness state."""

    def __init__(self, state: HarnessState, logger: Logger):
        self._state = state
        self._logger = logger

    @property
    def state(self) -> HarnessState:
        return self._state

    @contextmanager
    def isolated(self, request: pytest.FixtureRequest) -> Generator[IsolatedTest, None, None]:
        """Provide an IsolatedTest and roll it back on every exit path.

        An exception raised by the body is re-raised unchanged, after the
        rollback. A failing rollback is only logged.
        """
        if self._state.skip:
            pytest.skip("database tests are skipped in short mode")

        conn, transaction = self._begin(self._state.engine)
        test = IsolatedTest(request, conn, self._logger)
        try:
            yield test
        except BaseException:
            self._resolve(test, transaction, "tx.rollback during failure")
            raise
        else:
            self._resolve(test, transaction, "tx.rollback on test complete")

    def run(self, body: TestBody, request: pytest.FixtureRequest) -> None:
        with self.isolated(request) as test:
            body(test)

    def inject(self, body: TestBody) -> Callable[[pytest.FixtureRequest], None]:
        """Wrap ``body`` into a pytest test function bound to this injector."""

        def case(request: pytest.FixtureRequest) -> None:
            self.run(body, request)

        return _as_test(case, body)

    def _begin(self, engine: Engine) -> tuple[Connection, RootTransaction]:
        try:
            conn = engine.connect()
        except Exception as e:
            pytest.fail(f"engine.connect: {e}")

        try:
            return conn, conn.begin()
        except Exception as e:
            conn.close()
            pytest.fail(f"engine.begin: {e}")

    def _resolve(self, test: IsolatedTest, transaction: RootTransaction, operation: str) -> None:
        try:
            test._close_session()
        except Exception as e:
            self._logger.warning("session.close: {}", e)

        try:
            transaction.rollback()
        except Exception as e:
            self._logger.warning("{}: {}", operation, e)

        try:
            test.tx.close()
        except Exception as e:
            self._logger.warning("connection.close: {}", e)


def inject(body: TestBody) -> Callable[[pytest.FixtureRequest], None]:
    """Turn ``body`` into a pytest test running in its own transaction.

    The injector comes from the ``dbtesting_injector`` fixture, provided when
    the tests run through ``Harness.main`` or ``python -m dbtesting``.

    Usage:
        @inject
        def test_insert(t):
            t.tx.exec_driver_sql("INSERT INTO films (code, title, did) VALUES ('abcde', 'x', 1)")
    """

    def case(request: pytest.FixtureRequest) -> None:
        injector: Injector = request.getfixturevalue(INJECTOR_FIXTURE)
        injector.run(body, request)

    return _as_test(case, body)


def _as_test(case: Callable, body: TestBody) -> Callable:
    # No __wrapped__: pytest must see the (request) signature, not the body's.
    for attr in ("__module__", "__name__", "__qualname__", "__doc__"):
        if hasattr(body, attr):
            setattr(case, attr, getattr(body, attr))
    # Marks are attached directly: MarkDecorator treats a "<lambda>" as a mark argument.
    case.pytestmark = [*getattr(body, "pytestmark", []), pytest.mark.db.mark]
    return case
