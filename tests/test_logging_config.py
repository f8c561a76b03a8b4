"""
Tests for the shared logging setup.
"""

import logging

from logging_config import QUIET_LOGGERS, get_logger


def test_pillow_debug_output_is_suppressed():
    assert "PIL" in QUIET_LOGGERS
    assert logging.getLogger("PIL").level == logging.INFO
    assert not logging.getLogger("PIL.PngImagePlugin").isEnabledFor(logging.DEBUG)


def test_get_logger_returns_named_logger():
    logger = get_logger("optimizer.image_processor")

    assert logger is logging.getLogger("optimizer.image_processor")
    assert logger.name == "optimizer.image_processor"
