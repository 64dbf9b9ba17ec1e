"""
Hush core infrastructure: settings and logging.
"""

from .config import HushSettings, get_settings, reset_settings
from .formatters import format_epoch_ms, get_utc_timestamp
from .logging import get_logger, reset_logging

__all__ = [
    "HushSettings",
    "format_epoch_ms",
    "get_logger",
    "get_settings",
    "get_utc_timestamp",
    "reset_logging",
    "reset_settings",
]
