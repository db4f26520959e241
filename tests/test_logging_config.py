"""Tests for logging setup."""

import logging

from logging_config import get_logger, setup_logging


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "council.log"
    setup_logging(log_level="debug", log_file=str(log_file))
    try:
        get_logger("council.test").debug("seat claimed")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "seat claimed" in log_file.read_text()
        assert logging.getLogger().level == logging.DEBUG
    finally:
        setup_logging(log_level="WARNING")


def test_setup_logging_does_not_stack_handlers():
    setup_logging(log_level="INFO")
    setup_logging(log_level="INFO")
    assert len(logging.getLogger().handlers) == 1
    setup_logging(log_level="WARNING")
