from typing import Sequence

import pytest


class PytestRunner:
    """Runs pytest in the current process.

    Plugins passed here are registered before collection, which is how the
    harness hands its state to the tests without a module-level global.
    """

    def __init__(self, args: Sequence[str] = (), plugins: Sequence[object] = ()):
        self.args = list(args)
        self.plugins = list(plugins)

    def run(self) -> int:
        return int(pytest.main(self.args, plugins=self.plugins))

    def __repr__(self) -> str:
        return f"PytestRunner(args={self.args!r})"
