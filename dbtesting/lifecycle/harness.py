from typing import Callable, Sequence

import pytest

from ..pytest_plugin import HarnessPlugin
from .isolation import Injector, TestBody
from .options import Config
from .orchestrator import SuiteRunner, run_tests
from .runner import PytestRunner
from .state import HarnessState


class Harness:
    """One test run: configuration, state and the injector reading it.

    Usage:
        harness = Harness(Config(
            setup=sql("CREATE TABLE films (code char(5) PRIMARY KEY, title varchar(40))"),
            cleanup=sql("DROP TABLE films"),
        ))
        sys.exit(harness.main(["tests/"]))
    """

    config: Config
    state: HarnessState
    injector: Injector

    def __init__(self, config: Config | None = None):
        self.config = (config or Config()).with_defaults()
        self.state = HarnessState()
        self.injector = Injector(self.state, self.config.logger)

    def run_tests(self, runner: SuiteRunner) -> int:
        """Set up, run ``runner`` and clean up. Only call once per harness."""
        return run_tests(runner, self.config, self.state)

    def main(self, args: Sequence[str] = ()) -> int:
        """Run pytest with ``args`` against this harness."""
        return self.run_tests(PytestRunner(args, plugins=[HarnessPlugin(self.injector)]))

    def inject(self, body: TestBody) -> Callable[[pytest.FixtureRequest], None]:
        return self.injector.inject(body)
