from __future__ import annotations

import logging
from io import StringIO

from ct_stowage.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    buf = StringIO()
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    handler.setStream(buf)
    return buf


def test_setup_logging_creates_single_stdout_handler():
    logger = setup_logging()
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent_and_debug_adjusts_level():
    first = setup_logging()
    second = setup_logging(debug=True)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG
    assert second.handlers[0].level == logging.DEBUG


def test_labeled_prefixes():
    logger = setup_logging()
    buf = _capture(logger)
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    log_summary("blocks=3 matched=2")
    assert buf.getvalue().splitlines() == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY blocks=3 matched=2",
    ]


def test_module_loggers_propagate_into_app_logger():
    logger = setup_logging()
    buf = _capture(logger)
    logging.getLogger("ct_stowage.services.orchestrator").info("stowage map: 3 containers")
    assert buf.getvalue() == "INFO stowage map: 3 containers\n"


def test_get_logger_configures_on_first_use():
    assert get_logger().name == APP_LOGGER_NAME
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"
