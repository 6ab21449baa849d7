"""Date-time normalisation helpers.

Appointment times are stored as naive UTC. Calendar days are evaluated in
the configured business timezone.
"""

from datetime import date, datetime, time, timezone
from typing import Tuple
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive input is taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a stored naive datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def local_date(value: datetime, tz: ZoneInfo) -> date:
    return as_utc(value).astimezone(tz).date()


def bounds_for_date(day: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """First and last instant of ``day`` in ``tz``, as naive UTC."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return to_utc_naive(start), to_utc_naive(end)


def day_bounds(value: datetime, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    return bounds_for_date(local_date(value, tz), tz)
