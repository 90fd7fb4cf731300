"""Membership lifecycle rules: amounts, freezes, status transitions"""

from datetime import date

from gym_admin.domain.exceptions import InvalidStateError, ValidationError

MEMBERSHIP_STATUSES = (
    "active",
    "trial",
    "frozen",
    "cancelled",
    "expired",
    "pending_payment",
    "transferred",
    "upgraded",
    "downgraded",
)

# Statuses a member can actually train under
CURRENT_STATUSES = ("active", "trial")

# Statuses whose amounts are still being collected
COLLECTING_STATUSES = ("active", "trial", "pending_payment")

CHANGE_TYPES = ("upgrade", "downgrade")


def pending_amount(total_amount_due_cents: int, amount_paid_cents: int) -> int:
    return max(0, total_amount_due_cents - amount_paid_cents)


def initial_status(is_trial: bool) -> str:
    return "trial" if is_trial else "active"


def require_status(current: str, allowed: tuple, action: str) -> None:
    if current not in allowed:
        raise InvalidStateError(f"Cannot {action} a membership that is {current}")


def freeze_length(freeze_start_date: date, freeze_end_date: date) -> int:
    """Inclusive number of frozen days"""
    if freeze_end_date < freeze_start_date:
        raise ValidationError("freeze_end_date must not be before freeze_start_date")
    return (freeze_end_date - freeze_start_date).days + 1


def check_freeze_allowance(days_requested: int, days_used: int, allowance: int) -> None:
    if days_used + days_requested > allowance:
        left = max(0, allowance - days_used)
        raise ValidationError(
            f"Freeze of {days_requested} days exceeds the package allowance ({left} days left)"
        )


def check_change_allowed(change_type: str, upgrade_allowed: bool, downgrade_allowed: bool) -> None:
    if change_type not in CHANGE_TYPES:
        raise ValidationError(f"Unsupported change type: {change_type}")
    if change_type == "upgrade" and not upgrade_allowed:
        raise ValidationError("Current package does not allow upgrades")
    if change_type == "downgrade" and not downgrade_allowed:
        raise ValidationError("Current package does not allow downgrades")


def changed_status(change_type: str) -> str:
    return "upgraded" if change_type == "upgrade" else "downgraded"


def refund_eligibility(amount_paid_cents: int, refund_percentage: float) -> int:
    return round(amount_paid_cents * refund_percentage / 100)
