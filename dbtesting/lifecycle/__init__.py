from .deadline import Deadline
from .harness import Harness
from .isolation import Injector, IsolatedTest, inject
from .options import Config, Logger, default_skip
from .orchestrator import EXIT_SETUP_FAILED, SuiteRunner, run_tests
from .runner import PytestRunner
from .state import HarnessState

__all__ = [
    "Config",
    "Deadline",
    "EXIT_SETUP_FAILED",
    "Harness",
    "HarnessState",
    "Injector",
    "IsolatedTest",
    "Logger",
    "PytestRunner",
    "SuiteRunner",
    "default_skip",
    "inject",
    "run_tests",
]
