from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

All CLI output goes through one stdout handler with the labels
INFO|WARN|ERROR|SUMMARY. SUMMARY is a custom level between INFO and WARNING
used for the single closing line of a run.

The handler is shared by the application logger (``post_label_mapper``) and
the package logger (``src``) so that ``logging.getLogger(__name__)`` in any
module ends up on the same stream.

Structured per-row warnings are written separately by
src.logging.error_log.WarningLogBuffer.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "enable_debug",
    "log_summary",
    "reset_logging",
]

APP_LOGGER_NAME = "post_label_mapper"
PACKAGE_LOGGER_NAME = "src"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines.

    WARNING is shortened to WARN; SUMMARY is the custom level 25.
    """

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def _configure(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.setLevel(logging.INFO)
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    # root への伝播を止めて二重出力を防ぐ
    logger.propagate = False


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    Returns:
        The application logger
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())

    logger = logging.getLogger(APP_LOGGER_NAME)
    _configure(logger, handler)
    _configure(logging.getLogger(PACKAGE_LOGGER_NAME), handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def enable_debug() -> None:
    """Lower application and package loggers (and their handlers) to DEBUG."""
    for name in (APP_LOGGER_NAME, PACKAGE_LOGGER_NAME):
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    """Log ``message`` at SUMMARY level (rendered as ``SUMMARY <message>``)."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    for name in (APP_LOGGER_NAME, PACKAGE_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    _logger = None
