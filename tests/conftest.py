"""
Shared pytest fixtures.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by the CLI's logging setup."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
