"""
Date utilities for API operations.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Current time as a timezone-aware UTC datetime.

    Services take a clock argument defaulting to this function so tests can
    pin creation timestamps.
    """
    return datetime.now(timezone.utc)


def format_timestamp(value) -> str:
    """ISO-8601 text for CSV cells, empty for missing values."""
    if value is None:
        return ""
    return value.isoformat()
