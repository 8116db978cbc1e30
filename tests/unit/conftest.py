"""Shared test fixtures for unit tests."""

import logging

import pytest

from lint_testdrive.utils.rich_logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI runs so later tests never write to closed streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
