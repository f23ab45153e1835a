from __future__ import annotations

import logging

from src.logging.init import (
    APP_LOGGER_NAME,
    PACKAGE_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    enable_debug,
    get_logger,
    log_summary,
    setup_logging,
)


def test_labels_for_levels(capsys):
    logger = setup_logging()
    logger.info("hello")
    logger.warning("careful")
    logger.error("broken")
    log_summary("rows=1")
    out = capsys.readouterr().out.splitlines()
    assert out == ["INFO hello", "WARN careful", "ERROR broken", "SUMMARY rows=1"]


def test_package_loggers_share_stream(capsys):
    setup_logging()
    logging.getLogger("src.services.orchestrator").warning("row 1: x")
    assert capsys.readouterr().out == "WARN row 1: x\n"


def test_debug_hidden_until_enabled(capsys):
    logger = setup_logging()
    logger.debug("invisible")
    enable_debug()
    logging.getLogger(PACKAGE_LOGGER_NAME + ".mapping").debug("visible")
    assert capsys.readouterr().out == "DEBUG visible\n"


def test_setup_is_idempotent(capsys):
    first = setup_logging()
    second = setup_logging()
    assert first is second is get_logger()
    assert len(logging.getLogger(APP_LOGGER_NAME).handlers) == 1
    first.info("once")
    assert capsys.readouterr().out == "INFO once\n"


def test_formatter_falls_back_to_level_name():
    record = logging.LogRecord("x", 15, __file__, 1, "msg", None, None)
    record.levelname = "CUSTOM"
    assert LabeledFormatter().format(record) == "CUSTOM msg"
    summary = logging.LogRecord("x", SUMMARY_LEVEL, __file__, 1, "a=%d", (1,), None)
    assert LabeledFormatter().format(summary) == "SUMMARY a=1"
