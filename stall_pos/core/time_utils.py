from __future__ import annotations

from datetime import datetime, time, timezone, tzinfo
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (aware)."""
    return datetime.now(timezone.utc)


def business_now(tz: tzinfo) -> datetime:
    """'Now' expressed in the business time zone."""
    return datetime.now(tz)


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a stored timestamp to an aware UTC datetime.

    Backends without timezone support (SQLite) hand back naive values;
    those were written as UTC and are tagged as such.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def day_bounds(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    First and last instant of `now`'s calendar day in `tz`.

    A naive `now` is interpreted as UTC.
    """
    local = as_utc(now).astimezone(tz)
    start = datetime.combine(local.date(), time.min, tzinfo=tz)
    end = datetime.combine(local.date(), time.max, tzinfo=tz)
    return start, end


def in_business_day(moment: datetime, now: datetime, tz: tzinfo) -> bool:
    start, end = day_bounds(now, tz)
    local = as_utc(moment).astimezone(tz)
    return start <= local <= end
