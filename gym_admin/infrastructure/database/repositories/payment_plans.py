"""Data access for payment plans and installments"""

import uuid
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import func

from gym_admin.domain.models import ScheduledInstallment
from gym_admin.infrastructure.database.models import Installment, PaymentPlan
from gym_admin.infrastructure.database.repositories.base import BaseRepository

# adjusted: short-paid, still owes the rest of its amount
UNSETTLED_STATUSES = ("pending", "adjusted")
OPEN_INSTALLMENT_STATUSES = UNSETTLED_STATUSES + ("overdue",)


class PaymentPlanRepository(BaseRepository):
    """Repository for payment plans"""

    model = PaymentPlan

    def create_plan(self, schedule: List[ScheduledInstallment], **values) -> PaymentPlan:
        """Create payment plan with its installment rows"""
        db_plan = self.add(**values)

        for inst in schedule:
            self.db.add(
                Installment(
                    payment_plan_id=db_plan.id,
                    installment_number=inst.number,
                    amount_cents=inst.amount_cents,
                    due_date=inst.due_date,
                    status="pending",
                )
            )
        self.db.flush()
        self.db.refresh(db_plan)

        return db_plan

    def active_for_member(self, member_id: uuid.UUID, newest_first: bool = False) -> Optional[PaymentPlan]:
        order = PaymentPlan.created_at.desc() if newest_first else PaymentPlan.created_at.asc()
        return (
            self.db.query(PaymentPlan)
            .filter(PaymentPlan.member_id == member_id, PaymentPlan.status == "active")
            .order_by(order)
            .first()
        )


class InstallmentRepository(BaseRepository):
    """Repository for plan installments"""

    model = Installment

    def for_plan(self, plan_id: uuid.UUID) -> List[Installment]:
        return (
            self.db.query(Installment)
            .filter(Installment.payment_plan_id == plan_id)
            .order_by(Installment.installment_number.asc())
            .all()
        )

    def for_member(self, member_id: uuid.UUID) -> List[Installment]:
        return (
            self.db.query(Installment)
            .join(PaymentPlan, PaymentPlan.id == Installment.payment_plan_id)
            .filter(PaymentPlan.member_id == member_id)
            .order_by(Installment.due_date.asc(), Installment.installment_number.asc())
            .all()
        )

    def earliest_open(self, plan_id: uuid.UUID) -> Optional[Installment]:
        return (
            self.db.query(Installment)
            .filter(
                Installment.payment_plan_id == plan_id,
                Installment.status.in_(OPEN_INSTALLMENT_STATUSES),
            )
            .order_by(Installment.due_date.asc(), Installment.installment_number.asc())
            .first()
        )

    def total_paid(self, plan_id: uuid.UUID) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Installment.paid_amount_cents), 0))
            .filter(Installment.payment_plan_id == plan_id)
            .scalar()
        )
        return int(total or 0)

    def unsettled_due_before(self, today: date, gym_id: Optional[uuid.UUID] = None) -> List[Tuple[Installment, PaymentPlan]]:
        """Pending or short-paid installments already past due, paired with their plan (grace not yet applied)"""
        query = (
            self.db.query(Installment, PaymentPlan)
            .join(PaymentPlan, PaymentPlan.id == Installment.payment_plan_id)
            .filter(Installment.status.in_(UNSETTLED_STATUSES), Installment.due_date < today)
        )
        if gym_id:
            query = query.filter(PaymentPlan.gym_id == gym_id)
        return query.all()

    def unpaid_for_plan(self, plan_id: uuid.UUID) -> List[Installment]:
        return (
            self.db.query(Installment)
            .filter(
                Installment.payment_plan_id == plan_id,
                Installment.status.in_(OPEN_INSTALLMENT_STATUSES),
            )
            .all()
        )
