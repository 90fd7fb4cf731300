"""Unit tests for dashboard aggregations"""

from datetime import date
from gym_admin.domain.analytics import (
    average_attendance_percentage,
    income_stats,
    month_keys,
    monthly_comparison,
    upcoming_birthdays,
)


def _payment(amount, payment_type, day, code="MEM000001", name="Asha Rao"):
    return {
        "amount_cents": amount,
        "payment_type": payment_type,
        "payment_date": day,
        "member_code": code,
        "member_name": name,
    }


def test_income_stats_splits_by_payment_type():
    payments = [
        _payment(300000, "membership_fee", date(2024, 5, 1)),
        _payment(150000, "personal_training", date(2024, 5, 1), "MEM000002", "Kabir Shah"),
        _payment(20000, "penalty", date(2024, 5, 3)),
        _payment(5000, "locker_rent", date(2024, 5, 3), "MEM000002", "Kabir Shah"),
    ]
    stats = income_stats(payments)

    assert stats.total_income_cents == 475000
    assert stats.membership_income_cents == 300000
    assert stats.pt_income_cents == 150000
    assert stats.penalty_income_cents == 20000
    assert stats.addon_income_cents == 0
    assert stats.category_breakdown["locker_rent"] == 5000
    assert stats.daily_income == [
        {"date": date(2024, 5, 1), "amount_cents": 450000},
        {"date": date(2024, 5, 3), "amount_cents": 25000},
    ]


def test_income_stats_top_paying_members():
    payments = [
        _payment(100000, "membership_fee", date(2024, 5, 1), "MEM000001", "Asha Rao"),
        _payment(250000, "membership_fee", date(2024, 5, 2), "MEM000002", "Kabir Shah"),
        _payment(200000, "membership_fee", date(2024, 5, 3), "MEM000001", "Asha Rao"),
        _payment(10000, "membership_fee", date(2024, 5, 4), "MEM000003", "Meera Iyer"),
    ]
    top = income_stats(payments, top_n=2).top_paying_members

    assert [m["member_code"] for m in top] == ["MEM000001", "MEM000002"]
    assert top[0]["total_paid_cents"] == 300000
    assert top[0]["payment_count"] == 2


def test_income_stats_empty():
    stats = income_stats([])

    assert stats.total_income_cents == 0
    assert stats.daily_income == []
    assert stats.top_paying_members == []


def test_month_keys_cross_year_boundary():
    assert month_keys(date(2024, 3, 15), 3) == ["2024-01", "2024-02", "2024-03"]
    assert month_keys(date(2024, 1, 31), 3) == ["2023-11", "2023-12", "2024-01"]
    assert len(month_keys(date(2024, 6, 1), 12)) == 12


def test_monthly_comparison_fills_missing_months():
    rows = monthly_comparison({"2024-02": 500000}, {"2024-01": 80000, "2024-02": 120000}, ["2024-01", "2024-02"])

    assert rows == [
        {"month": "2024-01", "income_cents": 0, "expenses_cents": 80000, "profit_cents": -80000},
        {"month": "2024-02", "income_cents": 500000, "expenses_cents": 120000, "profit_cents": 380000},
    ]


def test_upcoming_birthdays_window_and_order():
    today = date(2024, 5, 10)
    people = [
        ("later", date(1990, 5, 16)),
        ("today", date(1985, 5, 10)),
        ("outside", date(1992, 5, 18)),
        ("passed", date(1999, 5, 9)),
        ("unknown", None),
    ]

    week = upcoming_birthdays(people, today, "week")
    assert [(p, d) for p, d in week] == [("today", date(2024, 5, 10)), ("later", date(2024, 5, 16))]

    assert [p for p, _ in upcoming_birthdays(people, today, "today")] == ["today"]


def test_leap_day_birthday_falls_on_feb_28():
    result = upcoming_birthdays([("leapling", date(1996, 2, 29))], date(2023, 2, 25), "week")
    assert result == [("leapling", date(2023, 2, 28))]


def test_average_attendance_percentage():
    visitors = {date(2024, 5, 1): 10, date(2024, 5, 2): 20}

    assert average_attendance_percentage(visitors, 30, 10) == 10
    assert average_attendance_percentage(visitors, 30, 0) == 0
