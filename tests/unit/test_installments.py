"""Unit tests for installment schedules and late fees"""

import pytest
from datetime import date, timedelta
from gym_admin.domain.exceptions import ValidationError
from gym_admin.domain.installments import (
    calculate_late_fee,
    default_first_due_date,
    generate_installment_schedule,
    is_overdue,
    last_due_date,
    plan_remaining,
    settlement_status,
)


def test_generate_installment_schedule_equal_split():
    """Test plan with evenly divisible amount"""
    amount = 300000  # 3000.00
    schedule = generate_installment_schedule(amount, 12, "monthly", date(2024, 2, 1))

    assert len(schedule) == 12
    assert all(inst.amount_cents == 25000 for inst in schedule)
    assert sum(inst.amount_cents for inst in schedule) == amount
    assert [inst.number for inst in schedule] == list(range(1, 13))


def test_generate_installment_schedule_rounding():
    """Test last installment absorbs remainder"""
    amount = 100005  # 1000.05
    schedule = generate_installment_schedule(amount, 4, "monthly", date(2024, 2, 1))

    assert [inst.amount_cents for inst in schedule] == [25001, 25001, 25001, 25002]
    assert sum(inst.amount_cents for inst in schedule) == amount


def test_monthly_due_dates_clamp_to_month_end():
    """Jan 31 start: Feb clamps to the 29th but March goes back to the 31st"""
    schedule = generate_installment_schedule(40000, 4, "monthly", date(2024, 1, 31))

    assert [inst.due_date for inst in schedule] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_weekly_and_quarterly_due_dates():
    start = date(2024, 5, 6)

    weekly = generate_installment_schedule(30000, 3, "weekly", start)
    assert [inst.due_date for inst in weekly] == [start, start + timedelta(days=7), start + timedelta(days=14)]

    quarterly = generate_installment_schedule(30000, 3, "quarterly", date(2024, 11, 30))
    assert [inst.due_date for inst in quarterly] == [date(2024, 11, 30), date(2025, 2, 28), date(2025, 5, 30)]


def test_generate_installment_schedule_zero_amount():
    """Nothing left to collect means no installments"""
    assert generate_installment_schedule(0, 12) == []


def test_generate_installment_schedule_rejects_bad_input():
    with pytest.raises(ValidationError):
        generate_installment_schedule(10000, 0)
    with pytest.raises(ValidationError):
        generate_installment_schedule(10000, 3, "daily")


def test_default_and_last_due_dates():
    assert default_first_due_date(date(2024, 1, 31)) == date(2024, 2, 29)
    assert default_first_due_date(date(2024, 1, 31), "weekly") == date(2024, 2, 7)
    assert last_due_date(date(2024, 1, 15), 12) == date(2024, 12, 15)


def test_late_fee_not_charged_within_grace_period():
    due = date(2024, 3, 1)

    assert calculate_late_fee(10000, due, date(2024, 2, 28), 2.0, 7) == 0  # early
    assert calculate_late_fee(10000, due, due, 2.0, 7) == 0  # on time
    assert calculate_late_fee(10000, due, date(2024, 3, 8), 2.0, 7) == 0  # last day of grace


def test_late_fee_is_flat_percentage_after_grace():
    due = date(2024, 3, 1)

    assert calculate_late_fee(10000, due, date(2024, 3, 9), 2.0, 7) == 200
    # One-off, not accrued per day
    assert calculate_late_fee(10000, due, date(2024, 6, 1), 2.0, 7) == 200


def test_late_fee_with_zero_grace_period():
    due = date(2024, 3, 1)
    assert calculate_late_fee(25000, due, date(2024, 3, 2), 5.0, 0) == 1250


def test_settlement_status():
    assert settlement_status(25000, 25000) == "paid"
    assert settlement_status(30000, 25000) == "paid"
    assert settlement_status(10000, 25000) == "adjusted"


def test_plan_remaining_never_negative():
    assert plan_remaining(300000, 50000, 100000) == (150000, "active")
    assert plan_remaining(300000, 50000, 250000) == (0, "completed")
    assert plan_remaining(300000, 50000, 260000) == (0, "completed")


def test_is_overdue_respects_grace_period():
    due = date(2024, 3, 1)

    assert not is_overdue(due, date(2024, 3, 1))
    assert is_overdue(due, date(2024, 3, 2))
    assert not is_overdue(due, date(2024, 3, 8), grace_period_days=7)
    assert is_overdue(due, date(2024, 3, 9), grace_period_days=7)
