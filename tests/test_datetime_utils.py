from datetime import date, datetime

import pytest
import pytz

from utils.datetime_utils import (
    as_date, day_range, days_in_month, make_clock, parse_day_key,
    start_of_week, sunday_index, to_day_key
)


def test_day_keys():
    assert to_day_key(date(2024, 2, 29)) == "2024-02-29"
    assert to_day_key(datetime(2024, 2, 29, 23, 59)) == "2024-02-29"
    assert to_day_key("2024-02-29") == "2024-02-29"
    assert parse_day_key("2024-02-29") == date(2024, 2, 29)
    assert as_date("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("value", ["2023-02-29", "29.02.2024", ""])
def test_invalid_day_keys(value):
    with pytest.raises(ValueError):
        to_day_key(value)


def test_day_range_is_inclusive():
    assert day_range("2024-02-27", "2024-03-01") == [
        "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"
    ]
    assert day_range("2024-03-02", "2024-03-01") == []


def test_week_starts_on_sunday():
    assert start_of_week("2024-03-15") == date(2024, 3, 10)
    assert start_of_week("2024-03-10") == date(2024, 3, 10)
    assert sunday_index("2024-03-10") == 0
    assert sunday_index("2024-03-16") == 6


def test_days_in_month():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2100, 2) == 28
    assert days_in_month(2000, 2) == 29


def test_clock_uses_zone_wall_date():
    zone = "Pacific/Kiritimati"
    expected = datetime.now(pytz.timezone(zone)).date()
    assert make_clock(zone)() == expected


def test_clock_without_zone_is_local_date():
    assert make_clock(None)() == date.today()
