"""
Logging helpers.

Every module obtains its logger with ``get_logger(__name__)``; the package
logger is configured once through ``setup_logging``.

Usage:
    from embedkit.utils.logging_config import get_logger, log_duration

    logger = get_logger(__name__)
    with log_duration(logger, "neighbor search"):
        ...
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

PACKAGE_LOGGER = "embedkit"
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger; names outside the package are nested under it."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str, None] = None,
    fmt: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name or number. Defaults to the configured
            ``EMBEDKIT_LOG_LEVEL``.
        fmt: Format string for the stream handler

    Returns:
        The package logger
    """
    if level is None:
        from ..config import config

        level = config.log_level
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_embedkit", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler._embedkit = True
        logger.addHandler(handler)
    return logger


@contextmanager
def log_duration(
    logger: logging.Logger, label: str, level: int = logging.DEBUG
) -> Iterator[dict]:
    """
    Log how long the enclosed block took, in milliseconds.

    Yields a dict whose ``elapsed_ms`` entry is filled in on exit.
    """
    timing: dict = {"elapsed_ms": None}
    start_time = time.time()
    try:
        yield timing
    finally:
        end_time = time.time()
        timing["elapsed_ms"] = (end_time - start_time) * 1000
        logger.log(level, f"{label} took {timing['elapsed_ms']:.2f}ms")
