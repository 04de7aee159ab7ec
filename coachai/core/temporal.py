"""
Calendar-day helpers.

Every streak and series rule compares local calendar dates, never raw
timestamp deltas: two activities on the same day never double count and a
one-second gap across midnight is a new day.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Union

Clock = Callable[[], datetime]
DateLike = Union[date, datetime]


def system_clock() -> datetime:
    """Current local time as an aware datetime."""
    return datetime.now().astimezone()


def local_date(value: DateLike) -> date:
    """
    Reduce a date or datetime to a local calendar date.

    Aware datetimes are converted to the local timezone first; naive ones are
    taken as already local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def today(clock: Clock = system_clock) -> date:
    return local_date(clock())


def same_day(a: DateLike, b: DateLike) -> bool:
    return local_date(a) == local_date(b)


def is_next_day(earlier: DateLike, later: DateLike) -> bool:
    """True when `later` falls exactly one calendar day after `earlier`."""
    return local_date(earlier) + timedelta(days=1) == local_date(later)
