"""Shared fixtures."""

import logging

import pytest

from rbisort.core.logging import AUDIT_LOGGER, DEBUG_LOGGER


@pytest.fixture(autouse=True)
def reset_log_handlers():
    """Detach handlers that setup_logging added during a test."""
    yield
    for name in (AUDIT_LOGGER, DEBUG_LOGGER):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
