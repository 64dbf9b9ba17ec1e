"""
Tests for hush structured logging.
"""

from __future__ import annotations

import json
import logging
import sys

from hush.core.logging import HushFormatter, get_logger, reset_logging


def _record(name: str = "hush.routing.ledger", msg: str = "Test message") -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    return record


class TestHushFormatter:
    """Test HushFormatter class."""

    def test_text_format_basic(self):
        formatted = HushFormatter(json_output=False).format(_record())
        assert formatted == "[HUSH INFO] [ledger] Test message"

    def test_text_format_with_exception(self):
        try:
            raise ValueError("bad rule")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        formatted = HushFormatter().format(record)

        assert "ValueError: bad rule" in formatted

    def test_json_format_basic(self):
        data = json.loads(HushFormatter(json_output=True).format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "hush.routing.ledger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_json_format_with_exception(self):
        try:
            raise ValueError("bad rule")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(HushFormatter(json_output=True).format(record))

        assert "ValueError: bad rule" in data["exception"]


class TestGetLogger:
    """Test get_logger function."""

    def test_caches_loggers(self):
        assert get_logger("hush.test.cache") is get_logger("hush.test.cache")

    def test_logger_does_not_propagate(self):
        logger = get_logger("hush.test.propagate")
        assert logger.propagate is False

    def test_reset_restores_propagation(self):
        logger = get_logger("hush.test.reset")
        reset_logging()
        assert logger.propagate is True
        assert logger.level == logging.NOTSET
        assert logger.handlers == []

