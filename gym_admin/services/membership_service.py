"""Membership lifecycle: creation, freezes, cancellations, package changes and transfers"""

import logging
import uuid
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from gym_admin.domain.installments import default_first_due_date
from gym_admin.domain.memberships import (
    CURRENT_STATUSES,
    changed_status,
    check_change_allowed,
    check_freeze_allowance,
    freeze_length,
    initial_status,
    pending_amount,
    require_status,
)
from gym_admin.infrastructure.database.models import Membership, MembershipChange, PaymentPlan
from gym_admin.infrastructure.database.repositories import (
    MemberRepository,
    MembershipChangeRepository,
    MembershipRepository,
    PackageRepository,
    StaffRepository,
)
from gym_admin.infrastructure.database.session import after_commit
from gym_admin.infrastructure.observability.metrics import membership_event_counter
from gym_admin.services.payment_plan_service import PaymentPlanService

logger = logging.getLogger(__name__)


class MembershipService:
    def __init__(self, db: Session):
        self.db = db
        self.memberships = MembershipRepository(db)
        self.changes = MembershipChangeRepository(db)
        self.members = MemberRepository(db)
        self.packages = PackageRepository(db)
        self.staff = StaffRepository(db)

    def _count_event(self, event: str, count: int = 1) -> None:
        after_commit(self.db, lambda: membership_event_counter.labels(event=event).inc(count))

    def get_memberships(self, **filters) -> List[Membership]:
        return self.memberships.list_memberships(**filters)

    def get_membership_by_id(self, membership_id: uuid.UUID) -> Membership:
        membership = self.memberships.get(membership_id)
        if not membership:
            raise NotFoundError("Membership", membership_id)
        return membership

    def create_membership(self, data: Dict[str, Any]) -> Membership:
        """
        Record a package purchase for a member.

        Dates default from the package duration and amounts from its price.
        No payment plan is created here; see create_payment_plan_for_membership.
        """
        if not self.members.get(data["member_id"]):
            raise NotFoundError("Member", data["member_id"])
        package = self.packages.get(data["package_id"])
        if not package:
            raise NotFoundError("Package", data["package_id"])

        values = dict(data)
        values.setdefault("start_date", date.today())
        values.setdefault("end_date", values["start_date"] + timedelta(days=package.duration_days))
        values.setdefault("is_trial", package.is_trial)
        values.setdefault("original_amount_cents", package.price_cents)
        values.setdefault(
            "total_amount_due_cents",
            values["original_amount_cents"] - values.get("discount_applied_cents", 0),
        )
        values.setdefault("amount_paid_cents", 0)
        values.setdefault("status", initial_status(values["is_trial"]))
        values.setdefault("pt_sessions_remaining", package.pt_sessions_included)

        if values["end_date"] < values["start_date"]:
            raise ValidationError("end_date must not be before start_date")

        values["amount_pending_cents"] = pending_amount(values["total_amount_due_cents"], values["amount_paid_cents"])

        membership = self.memberships.add(**values)
        self._count_event("created")
        return membership

    def update_membership(self, membership_id: uuid.UUID, updates: Dict[str, Any]) -> Membership:
        membership = self.get_membership_by_id(membership_id)
        values = dict(updates)
        if "total_amount_due_cents" in values or "amount_paid_cents" in values:
            values["amount_pending_cents"] = pending_amount(
                values.get("total_amount_due_cents", membership.total_amount_due_cents),
                values.get("amount_paid_cents", membership.amount_paid_cents),
            )
        return self.memberships.update(membership, values)

    def cancel_membership(
        self,
        membership_id: uuid.UUID,
        cancellation_date: date,
        cancellation_reason: str,
        cancellation_notice_period: Optional[int] = None,
        refund_eligible_amount_cents: Optional[int] = None,
    ) -> Membership:
        membership = self.get_membership_by_id(membership_id)
        if membership.status == "cancelled":
            raise InvalidStateError(f"Membership {membership_id} is already cancelled")

        values = {
            "status": "cancelled",
            "cancellation_date": cancellation_date,
            "cancellation_reason": cancellation_reason,
            "cancellation_notice_period": cancellation_notice_period,
        }
        if refund_eligible_amount_cents is not None:
            values["refund_eligible_amount_cents"] = refund_eligible_amount_cents

        self._count_event("cancelled")
        return self.memberships.update(membership, values)

    def freeze_membership(
        self,
        membership_id: uuid.UUID,
        freeze_start_date: date,
        freeze_end_date: date,
        freeze_reason: Optional[str] = None,
    ) -> Membership:
        """Pause an active membership; the end date moves out by the frozen days"""
        membership = self.get_membership_by_id(membership_id)
        require_status(membership.status, ("active",), "freeze")

        days = freeze_length(freeze_start_date, freeze_end_date)
        check_freeze_allowance(days, membership.freeze_days_used, membership.package.freeze_allowance)

        self._count_event("frozen")
        return self.memberships.update(
            membership,
            {
                "status": "frozen",
                "freeze_start_date": freeze_start_date,
                "freeze_end_date": freeze_end_date,
                "freeze_reason": freeze_reason,
                "freeze_days_used": membership.freeze_days_used + days,
                "end_date": membership.end_date + timedelta(days=days),
            },
        )

    def unfreeze_membership(self, membership_id: uuid.UUID) -> Membership:
        membership = self.get_membership_by_id(membership_id)
        require_status(membership.status, ("frozen",), "unfreeze")

        self._count_event("unfrozen")
        return self.memberships.update(
            membership,
            {"status": "active", "freeze_start_date": None, "freeze_end_date": None, "freeze_reason": None},
        )

    def change_membership(
        self,
        membership_id: uuid.UUID,
        new_package_id: uuid.UUID,
        change_type: str,
        reason: Optional[str] = None,
        amount_difference_cents: int = 0,
        adjustment_amount_cents: int = 0,
        additional_payment_cents: int = 0,
        refund_amount_cents: int = 0,
        prorated_amount_cents: int = 0,
        remaining_days: Optional[int] = None,
        new_trainer_id: Optional[uuid.UUID] = None,
        today: Optional[date] = None,
    ) -> Tuple[Membership, Membership, MembershipChange]:
        """
        Upgrade or downgrade onto another package.

        The current membership is closed today and a new one starts on the new
        package; the change itself is kept in membership_changes.
        """
        current = self.get_membership_by_id(membership_id)
        require_status(current.status, CURRENT_STATUSES, change_type)
        check_change_allowed(change_type, current.package.upgrade_allowed, current.package.downgrade_allowed)

        new_package = self.packages.get(new_package_id)
        if not new_package:
            raise NotFoundError("Package", new_package_id)

        trainer = None
        if new_trainer_id:
            trainer = self.staff.get(new_trainer_id)
            if not trainer:
                raise NotFoundError("Trainer", new_trainer_id)

        today = today or date.today()
        days = remaining_days if remaining_days is not None else new_package.duration_days

        new_membership = self.memberships.add(
            member_id=current.member_id,
            package_id=new_package.id,
            payment_plan_id=current.payment_plan_id,
            start_date=today,
            end_date=today + timedelta(days=days),
            status="active",
            original_amount_cents=new_package.price_cents,
            total_amount_due_cents=additional_payment_cents,
            amount_paid_cents=additional_payment_cents,
            amount_pending_cents=0,
            auto_renew=current.auto_renew,
            pt_sessions_remaining=new_package.pt_sessions_included,
        )

        self.memberships.update(current, {"status": changed_status(change_type), "actual_end_date": today})

        change = self.changes.add(
            member_id=current.member_id,
            from_membership_id=current.id,
            to_membership_id=new_membership.id,
            change_type=change_type,
            change_date=today,
            amount_difference_cents=amount_difference_cents,
            adjustment_amount_cents=adjustment_amount_cents,
            additional_payment_cents=additional_payment_cents,
            refund_amount_cents=refund_amount_cents,
            prorated_amount_cents=prorated_amount_cents,
            remaining_days=remaining_days,
            new_trainer_id=new_trainer_id,
            reason=reason,
        )

        if trainer:
            self.members.update(current.member, {"assigned_trainer_id": trainer.id})

        self._count_event(change_type)
        logger.info(
            "Membership changed",
            extra={
                "change_type": change_type,
                "from_membership_id": str(current.id),
                "to_membership_id": str(new_membership.id),
            },
        )
        return current, new_membership, change

    def transfer_membership(
        self,
        membership_id: uuid.UUID,
        to_member_id: uuid.UUID,
        transfer_fee_paid_cents: int = 0,
        reason: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Membership:
        membership = self.get_membership_by_id(membership_id)
        require_status(membership.status, CURRENT_STATUSES, "transfer")

        target = self.members.get(to_member_id)
        if not target:
            raise NotFoundError("Member", to_member_id)
        if target.id == membership.member_id:
            raise ValidationError("Cannot transfer a membership to the same member")

        from_member_id = membership.member_id
        membership.member = target
        self.memberships.update(
            membership,
            {
                "status": "transferred",
                "transferred_from_member_id": from_member_id,
                "transferred_to_member_id": target.id,
                "transfer_fee_paid_cents": transfer_fee_paid_cents,
            },
        )

        self.changes.add(
            member_id=from_member_id,
            from_membership_id=membership.id,
            to_membership_id=membership.id,
            change_type="transfer",
            change_date=today or date.today(),
            additional_payment_cents=transfer_fee_paid_cents,
            reason=reason,
        )

        self._count_event("transferred")
        return membership

    def get_membership_changes(self, member_id: uuid.UUID) -> List[MembershipChange]:
        return self.changes.for_member(member_id)

    def get_expiring_memberships(
        self,
        days: Optional[int] = None,
        gym_id: Optional[uuid.UUID] = None,
        today: Optional[date] = None,
    ) -> List[Membership]:
        days = settings.expiring_window_days if days is None else days
        today = today or date.today()
        return self.memberships.expiring(today + timedelta(days=days), gym_id)

    def get_trial_memberships(self, gym_id: Optional[uuid.UUID] = None) -> List[Membership]:
        return self.memberships.trials(gym_id)

    def convert_trial_membership(
        self,
        membership_id: uuid.UUID,
        new_package_id: uuid.UUID,
        trial_conversion_discount_cents: int = 0,
        payment_plan_id: Optional[uuid.UUID] = None,
        today: Optional[date] = None,
    ) -> Membership:
        membership = self.get_membership_by_id(membership_id)
        if not membership.is_trial or membership.status != "trial":
            raise InvalidStateError(f"Membership {membership_id} is not an open trial")

        if not self.packages.get(new_package_id):
            raise NotFoundError("Package", new_package_id)

        values = {
            "package_id": new_package_id,
            "is_trial": False,
            "trial_converted_date": today or date.today(),
            "trial_conversion_discount_cents": trial_conversion_discount_cents,
            "status": "active",
        }
        if payment_plan_id:
            values["payment_plan_id"] = payment_plan_id

        self._count_event("converted")
        return self.memberships.update(membership, values)

    def create_payment_plan_for_membership(self, membership_id: uuid.UUID) -> Optional[PaymentPlan]:
        """
        Put a membership's outstanding balance on the default installment plan.

        Returns the existing plan when one is already linked, and None for
        trials and memberships with nothing left to collect.
        """
        membership = self.get_membership_by_id(membership_id)

        if membership.payment_plan_id:
            return membership.payment_plan
        if membership.is_trial or membership.total_amount_due_cents <= 0:
            return None

        remaining = membership.total_amount_due_cents - membership.amount_paid_cents
        if remaining <= 0:
            return None

        plan = PaymentPlanService(self.db).create_payment_plan(
            gym_id=membership.member.gym_id,
            member_id=membership.member_id,
            total_amount_cents=membership.total_amount_due_cents,
            down_payment_cents=membership.amount_paid_cents,
            remaining_amount_cents=remaining,
            number_of_installments=settings.default_installment_count,
            installment_frequency="monthly",
            first_installment_date=default_first_due_date(membership.start_date, "monthly"),
            late_fee_percentage=settings.default_late_fee_percentage,
            grace_period_days=settings.default_grace_period_days,
        )
        self.memberships.update(membership, {"payment_plan_id": plan.id})
        return plan

    def get_membership_stats(self, gym_id: uuid.UUID, today: Optional[date] = None) -> Dict[str, int]:
        return {
            "total_active": self.memberships.count_by_status(gym_id, "active"),
            "trial_memberships": self.memberships.count_by_status(gym_id, "trial"),
            "expiring_memberships": len(self.get_expiring_memberships(gym_id=gym_id, today=today)),
            "total_revenue_cents": self.memberships.total_paid(gym_id),
        }

    def expire_lapsed_memberships(self, today: Optional[date] = None, gym_id: Optional[uuid.UUID] = None) -> int:
        today = today or date.today()
        lapsed = self.memberships.lapsed(today, gym_id)
        for membership in lapsed:
            membership.status = "expired"
            membership.actual_end_date = membership.end_date
        self.db.flush()

        if lapsed:
            self._count_event("expired", len(lapsed))
            logger.info("Memberships expired", extra={"count": len(lapsed), "as_of": today.isoformat()})
        return len(lapsed)
