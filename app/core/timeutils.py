"""Naive local timestamps.

Entries are stored as naive wall-clock times in the configured zone; every
"now" and every timezone-aware client timestamp goes through here.
"""

from datetime import date, datetime, time, timedelta

import pytz


def local_now(timezone_name: str) -> datetime:
    """Current wall time in `timezone_name`, without tzinfo, second precision."""
    tz = pytz.timezone(timezone_name)
    return datetime.now(tz).replace(tzinfo=None, microsecond=0)


def to_naive_local(value: datetime, timezone_name: str) -> datetime:
    """Convert an aware datetime into the configured zone and drop tzinfo.

    Naive values are assumed to already be local wall time.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.timezone(timezone_name)).replace(tzinfo=None)


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def next_day_start(day: date) -> datetime:
    """Exclusive upper bound that makes `day` inclusive as a whole day."""
    return datetime.combine(day + timedelta(days=1), time.min)
