"""Unit tests for date helpers"""

from datetime import date, datetime, time
from gym_admin.utils.date_utils import (
    add_months,
    end_of_previous_day,
    month_key,
    next_anniversary,
    start_of_month,
)


def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_month_helpers():
    assert start_of_month(date(2024, 7, 19)) == date(2024, 7, 1)
    assert month_key(date(2024, 7, 19)) == "2024-07"


def test_end_of_previous_day():
    cutoff = end_of_previous_day(datetime(2024, 3, 1, 2, 15))
    assert cutoff == datetime.combine(date(2024, 2, 29), time.max)


def test_next_anniversary():
    assert next_anniversary(date(1990, 8, 1), date(2024, 8, 1)) == date(2024, 8, 1)
    assert next_anniversary(date(1990, 8, 1), date(2024, 8, 2)) == date(2025, 8, 1)
    assert next_anniversary(date(2000, 2, 29), date(2025, 1, 1)) == date(2025, 2, 28)
