"""Payment plans: installment schedules, settlement and late fees"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from gym_admin.domain.installments import (
    calculate_late_fee,
    default_first_due_date,
    generate_installment_schedule,
    is_overdue,
    last_due_date,
    plan_remaining,
    settlement_status,
)
from gym_admin.domain.models import PaymentSummary
from gym_admin.infrastructure.database.models import Installment, PaymentPlan
from gym_admin.infrastructure.database.repositories import InstallmentRepository, PaymentPlanRepository
from gym_admin.infrastructure.database.repositories.payment_plans import UNSETTLED_STATUSES
from gym_admin.infrastructure.database.session import after_commit
from gym_admin.infrastructure.observability.metrics import record_installment_payment

logger = logging.getLogger(__name__)

SETTLED_STATUSES = ("paid", "cancelled")


def _outstanding(installment: Installment) -> int:
    return max(0, installment.amount_cents - (installment.paid_amount_cents or 0))


class PaymentPlanService:
    def __init__(self, db: Session):
        self.db = db
        self.plans = PaymentPlanRepository(db)
        self.installments = InstallmentRepository(db)

    def create_payment_plan(
        self,
        gym_id: uuid.UUID,
        member_id: uuid.UUID,
        total_amount_cents: int,
        down_payment_cents: int = 0,
        remaining_amount_cents: Optional[int] = None,
        number_of_installments: Optional[int] = None,
        installment_frequency: Optional[str] = None,
        first_installment_date: Optional[date] = None,
        late_fee_percentage: Optional[float] = None,
        grace_period_days: Optional[int] = None,
    ) -> PaymentPlan:
        """
        Create a plan and materialize its installment rows.

        Remaining balance defaults to total minus down payment and is split by
        generate_installment_schedule (last installment absorbs the remainder).
        """
        n = number_of_installments or settings.default_installment_count
        frequency = installment_frequency or settings.default_installment_frequency
        if late_fee_percentage is None:
            late_fee_percentage = settings.default_late_fee_percentage
        if grace_period_days is None:
            grace_period_days = settings.default_grace_period_days

        if remaining_amount_cents is None:
            remaining_amount_cents = total_amount_cents - down_payment_cents
        if remaining_amount_cents < 0:
            raise ValidationError("Down payment exceeds the plan total")

        first_due = first_installment_date or default_first_due_date(date.today(), frequency)
        schedule = generate_installment_schedule(remaining_amount_cents, n, frequency, first_due)

        plan = self.plans.create_plan(
            schedule,
            gym_id=gym_id,
            member_id=member_id,
            total_amount_cents=total_amount_cents,
            down_payment_cents=down_payment_cents,
            remaining_amount_cents=remaining_amount_cents,
            number_of_installments=n,
            installment_amount_cents=remaining_amount_cents // n,
            installment_frequency=frequency,
            first_installment_date=first_due,
            last_installment_date=schedule[-1].due_date if schedule else last_due_date(first_due, n, frequency),
            late_fee_percentage=late_fee_percentage,
            grace_period_days=grace_period_days,
            status="active" if remaining_amount_cents > 0 else "completed",
        )
        logger.info(
            "Payment plan created",
            extra={"plan_id": str(plan.id), "member_id": str(member_id), "installments": len(schedule)},
        )
        return plan

    def get_payment_plan(self, plan_id: uuid.UUID) -> PaymentPlan:
        plan = self.plans.get(plan_id)
        if not plan:
            raise NotFoundError("Payment plan", plan_id)
        return plan

    def get_installments(self, plan_id: uuid.UUID) -> List[Installment]:
        self.get_payment_plan(plan_id)
        return self.installments.for_plan(plan_id)

    def get_member_installments(self, member_id: uuid.UUID) -> List[Installment]:
        return self.installments.for_member(member_id)

    def pay_installment(
        self,
        installment_id: uuid.UUID,
        paid_amount_cents: int,
        payment_method: str,
        transaction_reference: Optional[str] = None,
        notes: Optional[str] = None,
        paid_on: Optional[date] = None,
    ) -> Installment:
        """
        Settle an installment and recompute the plan's remaining balance.

        Partial payments leave the installment `adjusted`; a later payment on
        the same installment adds to what was already paid.
        """
        installment = self.installments.get(installment_id)
        if not installment:
            raise NotFoundError("Installment", installment_id)
        if installment.status in SETTLED_STATUSES:
            raise ConflictError(f"Installment {installment_id} is already {installment.status}")

        plan = installment.plan
        paid_on = paid_on or date.today()

        late_fee = calculate_late_fee(
            installment.amount_cents,
            installment.due_date,
            paid_on,
            plan.late_fee_percentage,
            plan.grace_period_days,
        )
        total_paid = (installment.paid_amount_cents or 0) + paid_amount_cents
        status = settlement_status(total_paid, installment.amount_cents)

        self.installments.update(
            installment,
            {
                "paid_date": paid_on,
                "paid_amount_cents": total_paid,
                "late_fee_cents": late_fee,
                "status": status,
                "payment_method": payment_method,
                "transaction_reference": transaction_reference,
                "notes": notes,
            },
        )
        self.update_payment_plan_remaining_amount(plan.id)

        after_commit(self.db, lambda: record_installment_payment(status, late_fee))
        return installment

    def update_payment_plan_remaining_amount(self, plan_id: uuid.UUID) -> PaymentPlan:
        plan = self.get_payment_plan(plan_id)
        paid = self.installments.total_paid(plan_id)
        remaining, status = plan_remaining(plan.total_amount_cents, plan.down_payment_cents, paid)

        values = {"remaining_amount_cents": remaining}
        if plan.status != "cancelled":
            values["status"] = status
        return self.plans.update(plan, values)

    def get_member_payment_summary(self, member_id: uuid.UUID, today: Optional[date] = None) -> PaymentSummary:
        today = today or date.today()
        plan = self.plans.active_for_member(member_id)
        if not plan:
            return PaymentSummary()

        installments = self.installments.for_plan(plan.id)
        paid = [i for i in installments if i.status == "paid"]
        pending = [i for i in installments if i.status in UNSETTLED_STATUSES]
        upcoming = sorted((i for i in pending if i.due_date >= today), key=lambda i: i.due_date)
        overdue = [i for i in installments if i.status == "overdue" or (i in pending and i.due_date < today)]

        return PaymentSummary(
            total_amount_cents=plan.total_amount_cents,
            down_payment_cents=plan.down_payment_cents,
            paid_amount_cents=sum(i.paid_amount_cents or 0 for i in installments),
            remaining_amount_cents=plan.remaining_amount_cents,
            overdue_amount_cents=sum(_outstanding(i) for i in overdue),
            total_installments=len(installments),
            paid_installments=len(paid),
            pending_installments=len(pending),
            next_due_date=upcoming[0].due_date if upcoming else None,
            next_due_amount_cents=_outstanding(upcoming[0]) if upcoming else None,
        )

    def mark_overdue_installments(self, today: Optional[date] = None, gym_id: Optional[uuid.UUID] = None) -> int:
        """Flag pending and short-paid installments whose grace period has run out"""
        today = today or date.today()
        count = 0
        for installment, plan in self.installments.unsettled_due_before(today, gym_id):
            if is_overdue(installment.due_date, today, plan.grace_period_days):
                installment.status = "overdue"
                count += 1
        self.db.flush()

        if count:
            logger.info("Installments marked overdue", extra={"count": count, "as_of": today.isoformat()})
        return count

    def cancel_payment_plan(self, plan_id: uuid.UUID) -> PaymentPlan:
        plan = self.get_payment_plan(plan_id)
        if plan.status == "cancelled":
            raise InvalidStateError(f"Payment plan {plan_id} is already cancelled")

        for installment in self.installments.unpaid_for_plan(plan_id):
            installment.status = "cancelled"
        return self.plans.update(plan, {"status": "cancelled"})
