"""
Date and time helpers for local-calendar boundaries.

All timestamps are stored in UTC. Day and month boundaries are computed in
the configured hostel timezone and converted back to UTC before they are
used in queries.
"""

from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Tuple

import pytz

from hostelcare.config.settings import settings

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(pytz.UTC)


def local_timezone(name: Optional[str] = None):
    return pytz.timezone(name or settings.TIMEZONE)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive values read back from the store, convert aware ones"""
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def to_local(dt: datetime, tz_name: Optional[str] = None) -> datetime:
    return as_utc(dt).astimezone(local_timezone(tz_name))


def local_date(dt: datetime, tz_name: Optional[str] = None) -> date:
    """Calendar date of ``dt`` in the hostel timezone"""
    return to_local(dt, tz_name).date()


def _local_midnight_utc(day: date, tz_name: Optional[str] = None) -> datetime:
    tz = local_timezone(tz_name)
    return tz.localize(datetime.combine(day, time.min)).astimezone(pytz.UTC)


def day_bounds(now: datetime, tz_name: Optional[str] = None) -> Tuple[datetime, datetime]:
    """UTC range [start of local day, start of next local day)"""
    today = local_date(now, tz_name)
    return (
        _local_midnight_utc(today, tz_name),
        _local_midnight_utc(today + timedelta(days=1), tz_name),
    )


def start_of_month(now: datetime, tz_name: Optional[str] = None) -> datetime:
    """UTC instant of local midnight on the first day of the current month"""
    today = local_date(now, tz_name)
    return _local_midnight_utc(today.replace(day=1), tz_name)


def trailing_window_start(now: datetime, days: int = 7) -> datetime:
    return as_utc(now) - timedelta(days=days)
