"""
Hush Output Formatters

Timestamp helpers shared by CLI commands.
"""

from datetime import datetime, timezone


def format_datetime(dt: datetime) -> str:
    """Format datetime as an ISO string like "2026-01-15T12:30:00Z"."""
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_epoch_ms(epoch_ms: int) -> str:
    """Format epoch milliseconds as an ISO UTC string."""
    return format_datetime(datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc))


def get_utc_timestamp() -> str:
    """Get current UTC timestamp string."""
    return format_datetime(datetime.now(timezone.utc))
