"""Installment schedule and late-fee arithmetic for membership payment plans"""

from datetime import date, timedelta
from typing import List, Tuple

from gym_admin.domain.exceptions import ValidationError
from gym_admin.domain.models import ScheduledInstallment
from gym_admin.utils.date_utils import add_months

FREQUENCIES = ("weekly", "monthly", "quarterly")


def _offset(first_due_date: date, periods: int, frequency: str) -> date:
    if frequency == "weekly":
        return first_due_date + timedelta(days=7 * periods)
    if frequency == "monthly":
        return add_months(first_due_date, periods)
    if frequency == "quarterly":
        return add_months(first_due_date, 3 * periods)
    raise ValidationError(f"Unsupported installment frequency: {frequency}")


def default_first_due_date(start_date: date, frequency: str = "monthly") -> date:
    """First installment falls one period after the membership starts"""
    return _offset(start_date, 1, frequency)


def last_due_date(first_due_date: date, number_of_installments: int, frequency: str = "monthly") -> date:
    return _offset(first_due_date, number_of_installments - 1, frequency)


def generate_installment_schedule(
    amount_cents: int,
    number_of_installments: int = 12,
    frequency: str = "monthly",
    first_due_date: date | None = None,
) -> List[ScheduledInstallment]:
    """
    Split an outstanding balance into dated installments.

    Requirements:
    - Equal base amounts; last installment absorbs the rounding remainder
    - Due dates one period apart (weekly / monthly / quarterly)
    - Calendar months clamp to month end (Jan 31 -> Feb 28) and are measured
      from the first due date, so clamping never accumulates

    Example:
        1000.05 over 4 -> [250.01, 250.01, 250.01, 250.02]
        100005 cents // 4 = 25001 base, remainder 1
    """
    if number_of_installments < 1:
        raise ValidationError("number_of_installments must be at least 1")
    if frequency not in FREQUENCIES:
        raise ValidationError(f"Unsupported installment frequency: {frequency}")

    if amount_cents <= 0:
        return []

    if first_due_date is None:
        first_due_date = default_first_due_date(date.today(), frequency)

    base_amount = amount_cents // number_of_installments
    remainder = amount_cents % number_of_installments

    schedule = []
    for i in range(number_of_installments):
        amount = base_amount + (remainder if i == number_of_installments - 1 else 0)
        schedule.append(
            ScheduledInstallment(
                number=i + 1,
                due_date=_offset(first_due_date, i, frequency),
                amount_cents=amount,
            )
        )

    return schedule


def calculate_late_fee(
    amount_cents: int,
    due_date: date,
    paid_on: date,
    late_fee_percentage: float,
    grace_period_days: int,
) -> int:
    """
    Flat late fee on an installment settled after its grace period.

    Fee applies only when the payment lands more than `grace_period_days`
    after the due date; it is a one-off percentage of the installment amount,
    not accrued per day.
    """
    if paid_on <= due_date:
        return 0

    days_late = (paid_on - due_date).days - grace_period_days
    if days_late <= 0:
        return 0

    return round(amount_cents * late_fee_percentage / 100)


def settlement_status(paid_amount_cents: int, amount_cents: int) -> str:
    """Installment is paid in full or carried as adjusted (short payment)"""
    return "paid" if paid_amount_cents >= amount_cents else "adjusted"


def plan_remaining(total_cents: int, down_payment_cents: int, paid_cents: int) -> Tuple[int, str]:
    """Remaining balance (never negative) and the resulting plan status"""
    remaining = total_cents - down_payment_cents - paid_cents
    return max(0, remaining), ("completed" if remaining <= 0 else "active")


def is_overdue(due_date: date, today: date, grace_period_days: int = 0) -> bool:
    return due_date + timedelta(days=grace_period_days) < today
