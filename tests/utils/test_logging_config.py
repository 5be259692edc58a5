"""
Unit tests for logging configuration.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from cinefile.utils.logging_config import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger's handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only(root_logger):
    setup_logging(level="DEBUG")
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert not isinstance(root_logger.handlers[0], RotatingFileHandler)


def test_file_handler(root_logger, tmp_path):
    setup_logging(log_file="api.log", level="warning", log_dir=str(tmp_path / "logs"))
    assert root_logger.level == logging.WARNING
    assert any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
    assert (tmp_path / "logs" / "api.log").exists()
    for handler in root_logger.handlers:
        handler.close()
