"""Timestamp coercion shared by the grouper and the record loaders."""

from datetime import datetime, timezone
from typing import Union

Timestamp = Union[datetime, str, int, float]


def parse_timestamp(value: Timestamp | None) -> datetime | None:
    """Convert a datetime, ISO-8601 string or epoch milliseconds to a datetime.

    Raises ValueError for strings that are not ISO-8601 and for epoch values
    out of range.
    """
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return ms_to_datetime(value)
    if not isinstance(value, str):
        raise ValueError(f"Not a timestamp: {value!r}")
    if not value.strip():
        return None
    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))


def ms_to_datetime(ms: int | float) -> datetime:
    """Convert epoch milliseconds to a UTC datetime.

    Raises ValueError for values outside the platform's representable range.
    """
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OSError, OverflowError) as e:
        raise ValueError(f"Timestamp out of range: {ms!r}") from e


_MISSING = datetime.min.replace(tzinfo=timezone.utc)


def sort_key(value: datetime | None) -> datetime:
    """Comparable UTC form of a timestamp. Missing values sort before every real timestamp."""
    if value is None:
        return _MISSING
    # astimezone() treats naive values as local time
    return value.astimezone(timezone.utc)
