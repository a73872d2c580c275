"""Unit tests for the log module."""

import logging

from rich.logging import RichHandler

from greater_version.log import TAP_FORMAT, get_tap_logger
from greater_version.reporter import Reporter


def test_get_tap_logger() -> None:
    """Test that the logger writes bare messages to the Rich console only."""
    logger = get_tap_logger("tests.log")
    assert logger.name == "tests.log"
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, RichHandler)
    assert handler.markup is False
    assert handler.formatter is not None
    assert handler.formatter._fmt == TAP_FORMAT  # pylint: disable=protected-access


def test_get_tap_logger_is_idempotent() -> None:
    """Test that calling get_tap_logger twice does not duplicate handlers."""
    get_tap_logger("tests.log.twice")
    logger = get_tap_logger("tests.log.twice")
    assert len(logger.handlers) == 1


def test_tap_line_format() -> None:
    """Test that a record is rendered as the bare TAP line."""
    handler = get_tap_logger("tests.log.format").handlers[0]
    record = logging.LogRecord(
        "tests.log.format", logging.INFO, __file__, 1, "ok %d - %s", (1, "[pkg]"), None
    )
    assert handler.format(record) == "ok 1 - [pkg]"


def test_default_reporter_logger() -> None:
    """Test that a reporter without explicit logger uses the TAP logger."""
    reporter = Reporter()
    reporter.ok(True, "check")
    logger = logging.getLogger("greater_version.reporter")
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.propagate is False
