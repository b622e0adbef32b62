"""Test suite for the logging configuration."""

import logging

import pytest

from stressinversion.logging_config import LOG_FORMAT, get_logger, setup_global_logging


@pytest.fixture
def restore_root_logger():
    """Restore the handlers and level of the root logger after a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler.formatter is not None and handler.formatter._fmt == LOG_FORMAT:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


def test_default_logging(restore_root_logger):
    """Test that the default configuration logs at info level to the console."""
    setup_global_logging()
    assert restore_root_logger.level == logging.INFO
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_verbose_logging_to_file(restore_root_logger, tmp_path):
    """Test debug logging with a log file."""
    log_file = tmp_path / "inversion.log"
    setup_global_logging(verbose=True, log_file=str(log_file))
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 2

    get_logger("stressinversion.search").debug("Trial %d", 3)
    for handler in restore_root_logger.handlers:
        handler.flush()
    content = log_file.read_text()
    assert "stressinversion.search - DEBUG - Trial 3" in content


def test_repeated_setup_replaces_handlers(restore_root_logger):
    """Test that configuring twice does not duplicate handlers."""
    setup_global_logging()
    setup_global_logging()
    assert len(restore_root_logger.handlers) == 1


def test_get_logger_names():
    """Test module logger names."""
    assert get_logger("stressinversion.data").name == "stressinversion.data"
    assert get_logger() is logging.getLogger()
