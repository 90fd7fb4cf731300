"""Owner analytics: income, monthly profit, headline dashboard and birthdays"""

import uuid
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.analytics import (
    BIRTHDAY_WINDOWS,
    income_stats,
    month_keys,
    monthly_comparison,
    sum_by,
    upcoming_birthdays,
)
from gym_admin.domain.exceptions import ValidationError
from gym_admin.domain.models import IncomeStats
from gym_admin.infrastructure.database.repositories import (
    AttendanceRepository,
    ExpenseRepository,
    MemberRepository,
    MembershipRepository,
    PaymentRepository,
    RefundRequestRepository,
    StaffRepository,
)
from gym_admin.utils.date_utils import month_key, start_of_month


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.payments = PaymentRepository(db)
        self.expenses = ExpenseRepository(db)
        self.members = MemberRepository(db)
        self.memberships = MembershipRepository(db)
        self.refunds = RefundRequestRepository(db)
        self.staff = StaffRepository(db)
        self.attendance = AttendanceRepository(db)

    def get_income(self, gym_id: uuid.UUID, **filters) -> List[Dict[str, Any]]:
        """Paid payments only"""
        return self.payments.income_rows(gym_id, **filters)

    def get_income_stats(
        self,
        gym_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> IncomeStats:
        rows = self.payments.income_rows(gym_id, date_from=date_from, date_to=date_to)
        return income_stats(rows, top_n=settings.top_paying_members_limit)

    def get_monthly_income_comparison(
        self,
        gym_id: uuid.UUID,
        months: int = 12,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        today = today or date.today()
        keys = month_keys(today, months)
        since = date.fromisoformat(f"{keys[0]}-01")

        income = self.payments.income_rows(gym_id, date_from=since, date_to=today)
        expenses = self.expenses.list_expenses(gym_id, date_from=since, date_to=today)

        return monthly_comparison(
            sum_by(income, lambda p: month_key(p["payment_date"]), lambda p: p["amount_cents"]),
            sum_by(expenses, lambda e: month_key(e.expense_date), lambda e: e.amount_cents),
            keys,
        )

    def get_owner_dashboard(self, gym_id: uuid.UUID, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        month_start = start_of_month(today)

        by_status = self.members.count_by_status(gym_id)
        this_month_revenue = self.payments.total(gym_id, date_from=month_start, date_to=today)
        this_month_expenses = self.expenses.total(gym_id, month_start, today)

        return {
            "members": {
                "total": sum(by_status.values()),
                "active": by_status.get("active", 0),
                "trial": by_status.get("trial", 0),
            },
            "payments": {
                "total_revenue_cents": self.payments.total(gym_id),
                "this_month_revenue_cents": this_month_revenue,
                "pending_amount_cents": self.memberships.total_pending(gym_id),
                "today_revenue_cents": self.payments.total(gym_id, date_from=today, date_to=today),
            },
            "refunds": {
                "total": self.refunds.count(gym_id),
                "pending": self.refunds.count(gym_id, status="requested"),
                "processed": self.refunds.count(gym_id, status="processed"),
            },
            "staff_count": self.staff.count_for_gym(gym_id, status="active"),
            "today_attendance": len(self.attendance.between(gym_id, today, today)),
            "expiring_memberships": len(
                self.memberships.expiring(today + timedelta(days=settings.expiring_window_days), gym_id)
            ),
            "this_month_expenses_cents": this_month_expenses,
            "net_profit_cents": this_month_revenue - this_month_expenses,
        }

    def get_upcoming_birthdays(
        self,
        gym_id: uuid.UUID,
        window: str = "week",
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        if window not in BIRTHDAY_WINDOWS:
            raise ValidationError(f"Unknown birthday window: {window}")
        today = today or date.today()

        people = [(m, m.profile.date_of_birth) for m in self.members.list_with_birth_dates(gym_id)]
        return [
            {
                "member_id": member.id,
                "member_code": member.member_code,
                "name": member.profile.full_name,
                "phone": member.profile.phone,
                "date_of_birth": member.profile.date_of_birth,
                "next_birthday": birthday,
                "days_until": (birthday - today).days,
                "turning": birthday.year - member.profile.date_of_birth.year,
            }
            for member, birthday in upcoming_birthdays(people, today, window)
        ]
