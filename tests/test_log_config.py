"""Tests for logger setup."""

import logging

from cpubench.util import log_config


def test_setup_logger_does_not_duplicate_handlers() -> None:
    logger = log_config.setup_logger("cpubench.test_once")
    log_config.setup_logger("cpubench.test_once")

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_updates_existing_loggers(tmp_path) -> None:
    logger = log_config.setup_logger("cpubench.test_reconfigure")
    log_file = tmp_path / "debug.log"
    try:
        log_config.configure_logging(logging.DEBUG, log_file)
        logger.debug("detail")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert "detail" in log_file.read_text(encoding="utf-8")
    finally:
        log_config.configure_logging(logging.INFO, None)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_foreign_loggers_untouched() -> None:
    other = logging.getLogger("someone_else")
    level = other.level
    log_config.configure_logging(logging.DEBUG, None)
    try:
        assert other.level == level
    finally:
        log_config.configure_logging(logging.INFO, None)
