"""Timestamp helpers."""

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes so naive and aware values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
