"""
Time utilities for the API.

All timestamps are produced in UTC and serialized as ISO 8601.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_iso8601(dt: datetime) -> str:
    """
    Format a datetime as ISO 8601 string.

    Args:
        dt: The datetime to format (naive values are treated as UTC)

    Returns:
        ISO 8601 formatted string (e.g., "2024-01-15T10:30:00Z")
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
