"""Trainer commission arithmetic"""

from typing import Optional

COMMISSION_TYPES = ("per_session", "percentage", "fixed_amount")


def calculate_trainer_fee(
    commission_type: Optional[str],
    commission_value: float,
    session_fee_cents: int,
    total_sessions: int,
) -> int:
    """
    Trainer's cut of one session, in cents.

    - per_session:  flat value per session
    - percentage:   value% of the session fee
    - fixed_amount: package-level value spread over the sessions
    """
    if commission_type == "per_session":
        fee = commission_value
    elif commission_type == "percentage":
        fee = session_fee_cents * commission_value / 100
    elif commission_type == "fixed_amount":
        fee = commission_value / total_sessions if total_sessions > 0 else 0
    else:
        fee = 0

    return round(fee)


def session_fee_from_membership(total_amount_due_cents: int, total_sessions: int) -> int:
    if total_sessions <= 0:
        return 0
    return round(total_amount_due_cents / total_sessions)
