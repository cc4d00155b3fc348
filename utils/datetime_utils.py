# utils/datetime_utils.py

import calendar
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Union

import pytz

DayLike = Union[str, date]

DAY_KEY_FORMAT = "%Y-%m-%d"


def get_timezone(name: Optional[str]):
    """pytz zone for a name, None means the system local time."""
    if not name:
        return None
    return pytz.timezone(name)


def now_local(tz=None) -> datetime:
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def local_today(tz=None) -> date:
    # The calendar date is taken from the localized wall clock, never from UTC
    return now_local(tz).date()


def make_clock(timezone_name: Optional[str] = None) -> Callable[[], date]:
    """Clock returning today's local date for the given zone."""
    tz = get_timezone(timezone_name)

    def clock() -> date:
        return local_today(tz)

    return clock


def to_day_key(day: DayLike) -> str:
    if isinstance(day, datetime):
        day = day.date()
    if isinstance(day, date):
        return day.isoformat()
    return parse_day_key(day).isoformat()


def parse_day_key(day_key: str) -> date:
    return datetime.strptime(day_key, DAY_KEY_FORMAT).date()


def as_date(day: DayLike) -> date:
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    return parse_day_key(day)


def day_range(start: DayLike, end: DayLike) -> List[str]:
    """Inclusive list of DayKeys from start to end, oldest first."""
    first, last = as_date(start), as_date(end)
    return [(first + timedelta(days=i)).isoformat() for i in range((last - first).days + 1)]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def start_of_week(day: DayLike) -> date:
    """Most recent Sunday on or before the day."""
    current = as_date(day)
    # date.weekday(): Monday == 0 ... Sunday == 6
    return current - timedelta(days=(current.weekday() + 1) % 7)


def sunday_index(day: DayLike) -> int:
    """Weekday row with Sunday == 0."""
    return (as_date(day).weekday() + 1) % 7
