"""Tests for logging configuration."""

import logging

from listings_admin.app_logging import configure_logging


def test_configure_logging_adds_single_handler() -> None:
    logger = logging.getLogger("listings_admin")
    logger.handlers.clear()

    configure_logging()
    configure_logging("debug")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    configure_logging()
