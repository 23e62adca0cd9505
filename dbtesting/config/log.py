import sys
from typing import Any

from loguru import logger

from .settings_manager import DEFAULT_LOG_PREFIX

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[prefix]}</cyan> - <level>{message}</level>"
)


def get_default_logger(prefix: str = DEFAULT_LOG_PREFIX) -> Any:
    """Return the loguru logger bound with a fixed prefix."""
    return logger.bind(prefix=prefix)


def configure_logging(level: str = "INFO", sink: Any = sys.stderr) -> int:
    """Replace loguru's handlers with a single prefixed handler.

    Records logged without a ``prefix`` extra get the default prefix.

    Returns:
        The id of the new handler.
    """
    logger.remove()
    logger.configure(extra={"prefix": DEFAULT_LOG_PREFIX})
    return logger.add(sink, level=level, format=LOG_FORMAT)
