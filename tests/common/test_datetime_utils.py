from datetime import datetime, time

import pytest

from src.worktime.worktime.common.datetime_utils import format_day_month, format_hours, hours_between, week_window


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.75, "1h 45m"),
        (0.0, "0h 0m"),
        (3.5, "3h 30m"),
        (0.5, "0h 30m"),
        (1.999, "2h 0m"),
        (2.0, "2h 0m"),
        (0.25, "0h 15m"),
    ],
)
def test_format_hours(value, expected):
    assert format_hours(value) == expected


def test_hours_between_rounds_to_two_decimals():
    start = datetime(2026, 10, 12, 8, 0, 0)
    assert hours_between(start, datetime(2026, 10, 12, 9, 45, 0)) == 1.75
    assert hours_between(start, datetime(2026, 10, 12, 8, 20, 0)) == 0.33


def test_week_window_starts_at_midnight_seven_days_back(fixed_now):
    start, end = week_window(fixed_now.replace(hour=10, minute=3), days=7, end_at=time(10, 0))

    assert start == datetime(2026, 10, 5, 0, 0, 0)
    assert end == datetime(2026, 10, 12, 10, 0, 0)


def test_format_day_month_is_upper_case():
    assert format_day_month(datetime(2026, 10, 5)) == "5 OCTOBER"
