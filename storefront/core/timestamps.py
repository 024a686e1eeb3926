"""Timestamp helpers — every datetime leaving the API is timezone-aware UTC."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes (SQLite round-trips) are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str) -> datetime:
    """ISO-8601 (with optional trailing Z) -> aware datetime."""
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
