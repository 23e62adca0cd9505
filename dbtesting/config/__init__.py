"""Configuration for the test harness.

Responsibilities:
- Singleton settings manager loaded once from the environment
- Logging setup shared by the orchestrator and the isolation wrapper
"""

from .log import configure_logging, get_default_logger
from .settings_manager import (
    DEFAULT_CLEANUP_TIMEOUT,
    DEFAULT_LOG_PREFIX,
    DEFAULT_SETUP_TIMEOUT,
    DSN_ENV_VAR,
    ApplicationSettings,
    DatabaseSettings,
    HarnessSettings,
    SettingsManager,
    get_settings,
)

__all__ = [
    "SettingsManager",
    "ApplicationSettings",
    "DatabaseSettings",
    "HarnessSettings",
    "get_settings",
    "configure_logging",
    "get_default_logger",
    "DSN_ENV_VAR",
    "DEFAULT_SETUP_TIMEOUT",
    "DEFAULT_CLEANUP_TIMEOUT",
    "DEFAULT_LOG_PREFIX",
]
