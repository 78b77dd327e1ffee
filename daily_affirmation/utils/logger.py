"""Logging setup shared by the CLI and the services."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(
    name: str = "daily_affirmation",
    level: Union[int, str] = logging.WARNING,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure and return the package logger.

    Safe to call more than once: the handler is only attached the first time,
    later calls just update the level.

    Args:
        name: Logger name (package root by default)
        level: Logging level or its name (e.g. "DEBUG")
        stream: Output stream, defaults to stderr

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not any(getattr(h, "_affirm_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._affirm_handler = True
        logger.addHandler(handler)

    return logger
