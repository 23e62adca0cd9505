from typing import Generator

import pytest

from .lifecycle.isolation import INJECTOR_FIXTURE, Injector, IsolatedTest


class HarnessPlugin:
    """pytest plugin exposing one harness to the collected tests.

    Fixtures:
        dbtesting_injector: the Injector bound to the harness state
        db_test: an IsolatedTest rolled back after the test
    """

    def __init__(self, injector: Injector):
        self.injector = injector

    def pytest_configure(self, config: pytest.Config) -> None:
        config.addinivalue_line("markers", "db: test runs inside a rolled back database transaction")

    def pytest_report_header(self, config: pytest.Config) -> str:
        state = self.injector.state
        if state.skip:
            return "dbtesting: database tests skipped (short mode)"
        return f"dbtesting: {state.engine.url.render_as_string(hide_password=True)}"

    def pytest_collection_modifyitems(self, items: list[pytest.Item]) -> None:
        for item in items:
            if "db_test" in getattr(item, "fixturenames", ()):
                item.add_marker(pytest.mark.db)

    @pytest.fixture(name=INJECTOR_FIXTURE, scope="session")
    def injector_fixture(self) -> Injector:
        return self.injector

    @pytest.fixture(name="db_test")
    def db_test_fixture(self, request: pytest.FixtureRequest) -> Generator[IsolatedTest, None, None]:
        with self.injector.isolated(request) as test:
            yield test
