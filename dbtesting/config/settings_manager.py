"""Settings manager for the test harness.

This module provides a centralized settings broker that can:
- Load from environment variables (once, on first access)
- Validate settings
- Export settings with secrets masked
"""

import os
from dataclasses import asdict, dataclass
from threading import Lock
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..exceptions import ConfigurationError

ENV_PREFIX = "DBTESTING_"
DSN_ENV_VAR = f"{ENV_PREFIX}DSN"
DEFAULT_SETUP_TIMEOUT = 10.0
DEFAULT_CLEANUP_TIMEOUT = 3.0
DEFAULT_LOG_PREFIX = "dbtesting"

_TRUE_VALUES = ["true", "1", "yes", "on"]
_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Settings:
    """Base class for settings dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)


@dataclass
class ApplicationSettings(Settings):
    """Logging settings."""

    log_level: str = "INFO"
    log_prefix: str = DEFAULT_LOG_PREFIX


@dataclass
class DatabaseSettings(Settings):
    """Database connection settings.

    ``dsn`` is ``None`` when the environment variable is absent, which is
    different from it being present but empty.
    """

    dsn: Optional[str] = None


@dataclass
class HarnessSettings(Settings):
    """Lifecycle settings."""

    short: bool = False
    setup_timeout: float = DEFAULT_SETUP_TIMEOUT
    cleanup_timeout: float = DEFAULT_CLEANUP_TIMEOUT


class SettingsManager:
    """Thread-safe singleton settings manager.

    Usage:
        settings = SettingsManager.get_instance()
        dsn = settings.database.dsn
    """

    _instance: Optional["SettingsManager"] = None
    _lock: Lock = Lock()

    def __init__(self):
        """Initialize settings manager.

        Note: Use get_instance() instead of direct instantiation.
        """
        self.application = ApplicationSettings()
        self.database = DatabaseSettings()
        self.harness = HarnessSettings()
        self._change_lock = Lock()

    @classmethod
    def get_instance(cls) -> "SettingsManager":
        """Get or create the singleton instance.

        The environment is read exactly once, when the instance is created.

        Returns:
            SettingsManager instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
                    cls._instance.load_from_env()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (mainly for testing)."""
        with cls._lock:
            cls._instance = None

    def load_from_env(self, prefix: str = ENV_PREFIX) -> None:
        """Load settings from environment variables.

        Args:
            prefix: Prefix for environment variables

        Raises:
            ConfigurationError: if a numeric variable cannot be parsed
        """
        with self._change_lock:
            env_vars = os.environ

            logger.debug("Loading settings from environment variables with prefix={}", prefix)

            app_mapping = {
                f"{prefix}LOG_LEVEL": "log_level",
                f"{prefix}LOG_PREFIX": "log_prefix",
            }
            for env_key, attr_name in app_mapping.items():
                if env_key in env_vars:
                    value = env_vars[env_key]
                    if attr_name == "log_level":
                        value = value.upper()
                    setattr(self.application, attr_name, value)

            if f"{prefix}DSN" in env_vars:
                self.database.dsn = env_vars[f"{prefix}DSN"]

            harness_mapping = {
                f"{prefix}SHORT": "short",
                f"{prefix}SETUP_TIMEOUT": "setup_timeout",
                f"{prefix}CLEANUP_TIMEOUT": "cleanup_timeout",
            }
            for env_key, attr_name in harness_mapping.items():
                if env_key in env_vars:
                    value = env_vars[env_key]
                    if attr_name == "short":
                        value = value.strip().lower() in _TRUE_VALUES
                    else:
                        try:
                            value = float(value)
                        except ValueError as e:
                            raise ConfigurationError(f"{env_key} must be a number of seconds, got {value!r}") from e
                    setattr(self.harness, attr_name, value)

            logger.debug("Settings successfully loaded from environment")

    def export_settings(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Export all settings as a dictionary.

        Args:
            mask_secrets: If True, mask the password embedded in the DSN

        Returns:
            Dictionary containing all settings
        """
        settings = {
            "application": self.application.to_dict(),
            "database": self.database.to_dict(),
            "harness": self.harness.to_dict(),
        }

        dsn = settings["database"]["dsn"]
        if mask_secrets and dsn:
            settings["database"]["dsn"] = _mask_dsn(dsn)

        return settings

    def validate(self) -> Dict[str, List[str]]:
        """Validate current settings.

        Returns:
            Dictionary with validation errors by category
        """
        errors: Dict[str, List[str]] = {
            "application": [],
            "database": [],
            "harness": [],
        }

        if self.application.log_level not in _LOG_LEVELS:
            errors["application"].append("Invalid log level")

        if self.database.dsn is not None:
            driver, sep, info = self.database.dsn.partition(":")
            if not sep or not driver or not info:
                errors["database"].append("DSN must be formatted as DRIVER:CONNECTION_INFO")

        if self.harness.setup_timeout <= 0:
            errors["harness"].append("Setup timeout must be positive")
        if self.harness.cleanup_timeout <= 0:
            errors["harness"].append("Cleanup timeout must be positive")

        # Remove empty error lists
        errors = {k: v for k, v in errors.items() if v}

        return errors


def _mask_dsn(dsn: str) -> str:
    try:
        return make_url(dsn).render_as_string(hide_password=True)
    except ArgumentError:
        return "***MASKED***"


# Convenience function for global access
def get_settings() -> SettingsManager:
    """Get the global settings manager instance.

    Returns:
        SettingsManager singleton instance
    """
    return SettingsManager.get_instance()
