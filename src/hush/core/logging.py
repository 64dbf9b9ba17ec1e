"""
Hush Logging

Every hush module logs through ``get_logger(__name__)``. Loggers share one
stderr handler, take their level from HUSH_LOG_LEVEL (or HUSH_DEBUG), and
write either one-line text or JSON when HUSH_LOG_JSON is set.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional

from .config import get_settings


class HushFormatter(logging.Formatter):
    """Text or JSON formatter for hush log records."""

    def __init__(self, json_output: bool = False) -> None:
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        exc_text = None
        if record.exc_info:
            exc_text = "".join(traceback.format_exception(*record.exc_info))

        if self.json_output:
            data = {
                "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if exc_text:
                data["exception"] = exc_text
            return json.dumps(data)

        module = record.name.rsplit(".", 1)[-1]
        line = f"[HUSH {record.levelname}] [{module}] {record.getMessage()}"
        return f"{line}\n{exc_text}" if exc_text else line


_loggers: dict[str, logging.Logger] = {}
_handler: Optional[logging.Handler] = None


def _get_handler() -> logging.Handler:
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(HushFormatter(json_output=get_settings().log_json))
    return _handler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(get_settings().log_level_int)
    logger.addHandler(_get_handler())
    logger.propagate = False

    _loggers[name] = logger
    return logger


def reset_logging() -> None:
    """
    Return hush loggers to stdlib defaults.

    Restores propagate=True and level=NOTSET on every hush.* logger and
    detaches the shared handler, so pytest's caplog can capture records.
    """
    global _handler

    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if (name == "hush" or name.startswith("hush.")) and isinstance(logger, logging.Logger):
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
            if _handler is not None:
                logger.removeHandler(_handler)

    _handler = None
