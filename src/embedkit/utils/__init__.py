"""Utility modules for embedkit."""

from .logging_config import get_logger, log_duration, setup_logging

__all__ = [
    "get_logger",
    "log_duration",
    "setup_logging",
]
