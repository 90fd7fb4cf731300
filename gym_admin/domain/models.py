"""Domain models - pure Python dataclasses representing business values"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass
class ScheduledInstallment:
    """Single dated payment in an amortization schedule"""

    number: int
    due_date: date
    amount_cents: int


@dataclass
class PaymentSummary:
    """Installment position of a member's active payment plan"""

    total_amount_cents: int = 0
    down_payment_cents: int = 0
    paid_amount_cents: int = 0
    remaining_amount_cents: int = 0
    overdue_amount_cents: int = 0
    total_installments: int = 0
    paid_installments: int = 0
    pending_installments: int = 0
    next_due_date: Optional[date] = None
    next_due_amount_cents: Optional[int] = None


@dataclass
class ScanCode:
    """Decoded attendance scan input"""

    member_code: str
    expected_gym_id: Optional[str] = None


@dataclass
class ScanResult:
    """Outcome of a check-in / check-out scan"""

    success: bool
    message: str
    action: Optional[str] = None  # "check_in" or "check_out"
    member: Any = None
    membership: Any = None
    attendance: Any = None


@dataclass
class AttendanceStats:
    today_total: int
    today_checked_in: int
    yesterday_total: int
    week_total: int
    month_total: int
    average_daily: int
    auto_checkouts: int
    peak_hour: str


@dataclass
class IncomeStats:
    total_income_cents: int
    membership_income_cents: int
    pt_income_cents: int
    addon_income_cents: int
    penalty_income_cents: int
    setup_fee_income_cents: int
    transfer_fee_income_cents: int
    upgrade_fee_income_cents: int
    category_breakdown: Dict[str, int] = field(default_factory=dict)
    daily_income: List[Dict[str, Any]] = field(default_factory=list)
    top_paying_members: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ActorContext:
    """Who is making a change, as reported by the calling client"""

    user_id: Optional[str] = None
    profile_id: Optional[str] = None
