"""Relative-date buckets for the conversation sidebar."""

from datetime import date, datetime, timezone, tzinfo

from .core import (
    OLDER,
    RELATIVE_DATE_ORDER,
    THIS_WEEK,
    TODAY,
    YESTERDAY,
    RelativeDateGroup,
    Session,
)
from .timestamps import Timestamp, parse_timestamp, sort_key


def get_relative_date(
    now: Timestamp,
    timestamp: Timestamp | None,
    tz: tzinfo | None = None,
) -> str:
    """Return the sidebar bucket of ``timestamp`` as seen from ``now``.

    Buckets follow calendar days in ``tz`` (the host's local zone when None),
    not elapsed hours: 23:00 and 01:00 the next morning are a day apart.

    - 0 days: Today (timestamps in the future count as today too)
    - 1 day: Yesterday
    - 2 to 7 days: This week
    - more than 7 days, or no timestamp: Older
    """
    then = parse_timestamp(timestamp)
    if then is None:
        return OLDER

    days = (_calendar_day(parse_timestamp(now), tz) - _calendar_day(then, tz)).days
    if days <= 0:
        return TODAY
    if days == 1:
        return YESTERDAY
    if days <= 7:
        return THIS_WEEK
    return OLDER


def group_conversations_by_date(
    sessions: list[Session],
    now: Timestamp | None = None,
    tz: tzinfo | None = None,
) -> list[RelativeDateGroup]:
    """Bucket sessions for the sidebar.

    Only non-empty groups are returned, always in the order Today, Yesterday,
    This week, Older. Each group lists its sessions most recent first; sessions
    with equal timestamps keep their input order.
    """
    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)

    buckets: dict[str, list[Session]] = {name: [] for name in RELATIVE_DATE_ORDER}
    for session in sessions:
        buckets[get_relative_date(current, session.sidebar_timestamp, tz)].append(session)

    groups = []
    for name in RELATIVE_DATE_ORDER:
        if not buckets[name]:
            continue
        ordered = sorted(buckets[name], key=lambda s: sort_key(s.sidebar_timestamp), reverse=True)
        groups.append(RelativeDateGroup(group=name, sessions=ordered))
    return groups


def _calendar_day(value: datetime, tz: tzinfo | None) -> date:
    # astimezone() treats naive values as local time
    return value.astimezone(tz).date()
