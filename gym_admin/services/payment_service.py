"""Payments and their propagation to installments and membership balances"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.exceptions import NotFoundError, ValidationError
from gym_admin.domain.memberships import COLLECTING_STATUSES, pending_amount
from gym_admin.infrastructure.database.models import Membership, Payment
from gym_admin.infrastructure.database.repositories import (
    InstallmentRepository,
    MemberRepository,
    MembershipRepository,
    PaymentPlanRepository,
    PaymentRepository,
)
from gym_admin.infrastructure.database.session import after_commit
from gym_admin.infrastructure.observability.logging import log_payment
from gym_admin.infrastructure.observability.metrics import record_payment
from gym_admin.services.payment_plan_service import PaymentPlanService
from gym_admin.utils.date_utils import start_of_month


def generate_receipt_number(payment_date: date) -> str:
    return f"{settings.receipt_prefix}-{payment_date:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


class PaymentService:
    def __init__(self, db: Session):
        self.db = db
        self.payments = PaymentRepository(db)
        self.members = MemberRepository(db)
        self.memberships = MembershipRepository(db)
        self.plans = PaymentPlanRepository(db)
        self.installments = InstallmentRepository(db)
        self.plan_service = PaymentPlanService(db)

    def get_payments(self, **filters) -> List[Payment]:
        return self.payments.list_payments(**filters)

    def get_payment_by_id(self, payment_id: uuid.UUID) -> Payment:
        payment = self.payments.get(payment_id)
        if not payment:
            raise NotFoundError("Payment", payment_id)
        return payment

    def create_payment(self, data: Dict[str, Any]) -> Payment:
        """
        Record a payment.

        Flow for a paid membership fee:
        1. Settle the earliest open installment of the member's newest active plan
        2. Insert the payment linked to that installment and plan
        3. Recompute the membership's paid / pending amounts

        Everything is flushed into the caller's transaction; nothing commits here.
        """
        member = self.members.get(data["member_id"])
        if not member:
            raise NotFoundError("Member", data["member_id"])

        membership_id = data.get("membership_id")
        if membership_id:
            membership = self.memberships.get(membership_id)
            if not membership:
                raise NotFoundError("Membership", membership_id)
            if membership.member_id != member.id:
                raise ValidationError("Membership does not belong to this member")

        values = dict(data)
        values["gym_id"] = member.gym_id
        values.setdefault("payment_date", date.today())
        values.setdefault("status", "paid")
        values.setdefault("original_amount_cents", values["amount_cents"])
        if not values.get("receipt_number"):
            values["receipt_number"] = generate_receipt_number(values["payment_date"])

        is_membership_fee = bool(membership_id) and values["payment_type"] == "membership_fee"

        # 1. Settle the next installment
        installment = None
        if is_membership_fee and values["status"] == "paid":
            plan = self.plans.active_for_member(member.id, newest_first=True)
            open_installment = self.installments.earliest_open(plan.id) if plan else None
            if open_installment:
                installment = self.plan_service.pay_installment(
                    open_installment.id,
                    paid_amount_cents=values["amount_cents"],
                    payment_method=values["payment_method"],
                    transaction_reference=values.get("transaction_id"),
                    notes=values.get("description"),
                    paid_on=values["payment_date"],
                )
                values["installment_id"] = installment.id
                values["payment_plan_id"] = plan.id

        # 2. Persist payment
        payment = self.payments.add(**values)

        # 3. Propagate to membership balance
        if is_membership_fee:
            self.update_membership_amounts(membership_id)

        payment_type, amount_cents = payment.payment_type, payment.amount_cents
        after_commit(self.db, lambda: record_payment(payment_type, amount_cents))
        log_payment(
            str(payment.id),
            str(member.id),
            payment.payment_type,
            payment.amount_cents,
            installment_id=str(installment.id) if installment else None,
            late_fee_cents=installment.late_fee_cents if installment else 0,
        )
        return payment

    def update_membership_amounts(self, membership_id: uuid.UUID) -> Membership:
        """Membership paid amount is the sum of its paid payments"""
        membership = self.memberships.get(membership_id)
        if not membership:
            raise NotFoundError("Membership", membership_id)

        paid = self.payments.total_paid_for_membership(membership_id)
        return self.memberships.update(
            membership,
            {
                "amount_paid_cents": paid,
                "amount_pending_cents": pending_amount(membership.total_amount_due_cents, paid),
            },
        )

    def recalculate_all_membership_amounts(self, gym_id: uuid.UUID) -> int:
        memberships = self.memberships.list_by_statuses(COLLECTING_STATUSES, gym_id)
        for membership in memberships:
            self.update_membership_amounts(membership.id)
        return len(memberships)

    def update_payment(self, payment_id: uuid.UUID, updates: Dict[str, Any]) -> Payment:
        payment = self.get_payment_by_id(payment_id)
        affects_balance = "status" in updates or "amount_cents" in updates

        self.payments.update(payment, updates)

        if affects_balance and payment.membership_id and payment.payment_type == "membership_fee":
            self.update_membership_amounts(payment.membership_id)
        return payment

    def get_payment_stats(self, gym_id: uuid.UUID, today: Optional[date] = None) -> Dict[str, int]:
        today = today or date.today()
        return {
            "total_payments": self.payments.count(gym_id),
            "total_revenue_cents": self.payments.total(gym_id),
            "pending_payments": self.payments.count(gym_id, status="pending"),
            "this_month_revenue_cents": self.payments.total(gym_id, date_from=start_of_month(today)),
        }
