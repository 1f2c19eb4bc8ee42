"""
Centralized logging configuration for the recipemark annotation pipeline.
"""
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Create a formatter with a consistent format
FORMATTER = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: The name of the logger (typically __name__)

    Returns:
        A configured Logger instance
    """
    logger = logging.getLogger(name)

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def set_package_level(level: Union[int, str]) -> None:
    """Apply a level to every recipemark logger created so far."""
    resolved = _as_level(level)
    for name in list(logging.root.manager.loggerDict):
        if name == "recipemark" or name.startswith("recipemark."):
            logging.getLogger(name).setLevel(resolved)


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Setup the root logging configuration for the application.

    Args:
        level: The logging level (default: INFO), as a number or a name like "DEBUG"
    """
    logging.basicConfig(
        level=_as_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
