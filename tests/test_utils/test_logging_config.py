"""
Tests for logging helpers.
"""

import logging

from embedkit.utils.logging_config import PACKAGE_LOGGER, get_logger, log_duration, setup_logging


def test_get_logger_nests_under_package():
    assert get_logger("embedkit.core.dispatcher").name == "embedkit.core.dispatcher"
    assert get_logger("my_script").name == "embedkit.my_script"
    assert get_logger(PACKAGE_LOGGER).name == PACKAGE_LOGGER


def test_setup_logging_adds_one_handler():
    logger = setup_logging("info")
    handlers = [h for h in logger.handlers if getattr(h, "_embedkit", False)]
    setup_logging(logging.DEBUG)
    again = [h for h in logger.handlers if getattr(h, "_embedkit", False)]

    assert logger.level == logging.DEBUG
    assert len(handlers) == 1
    assert len(again) == 1

    for handler in again:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_log_duration(caplog):
    logger = get_logger("test_timing")
    caplog.set_level(logging.DEBUG, logger=PACKAGE_LOGGER)

    with log_duration(logger, "sleepless block") as timing:
        pass

    assert timing["elapsed_ms"] is not None
    assert timing["elapsed_ms"] >= 0
    assert "sleepless block took" in caplog.text
