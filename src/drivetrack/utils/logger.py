"""Centralized logging configuration.

All modules should use ``get_logger(__name__)`` to obtain a logger instance.
Handlers are only installed by ``configure_logging``, which the CLI calls once
per invocation.
"""

import logging
import sys
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_LOGGER = "drivetrack"


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger under the ``drivetrack`` hierarchy.
    """
    return logging.getLogger(name)


def configure_logging(level: str = "WARNING", stream=None) -> logging.Handler:
    """Attach a single stream handler to the package logger.

    Args:
        level: Level name such as ``DEBUG`` or ``INFO``
        stream: Target stream, defaults to the current ``sys.stderr``

    Returns:
        The installed handler, so callers can detach it again

    Raises:
        ValueError: If the level name is unknown
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: '{level}'")

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))

    root = logging.getLogger(_ROOT_LOGGER)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)
    return handler


def reset_logging(handler: Optional[logging.Handler] = None) -> None:
    """Detach a handler installed by ``configure_logging``."""
    root = logging.getLogger(_ROOT_LOGGER)
    if handler is None:
        handlers = list(root.handlers)
    else:
        handlers = [handler]
    for existing in handlers:
        root.removeHandler(existing)
        existing.close()
