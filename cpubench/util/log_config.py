"""
Logging configuration for the cpubench runner.

Provides centralized logging setup with clean, concise terminal output.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "cpubench"

CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Applied to loggers created after configure_logging() has run
_active_level = logging.INFO
_active_log_file: Optional[Path] = None


def _file_handler(log_file: Path) -> logging.FileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logger(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: the level set by configure_logging, INFO otherwise)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    level = _active_level if level is None else level
    log_file = log_file or _active_log_file

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file))

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """
    Re-apply level and file output to every cpubench logger created so far.

    Module loggers are built at import time, before the CLI has parsed
    --verbose / --log-file, so the CLI calls this once after parsing.
    """
    global _active_level, _active_log_file
    _active_level = level
    _active_log_file = log_file

    manager = logging.Logger.manager
    for name, logger in list(manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
            setup_logger(name, level=level, log_file=log_file)
