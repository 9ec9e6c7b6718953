"""
Time helpers.

Timestamps are stored as naive UTC so SQLite and PostgreSQL compare alike.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso_z(value: datetime) -> str:
    """Format a naive UTC timestamp as 2024-05-01T12:00:00.000Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"
