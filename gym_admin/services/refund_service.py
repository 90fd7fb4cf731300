"""Refund requests against memberships"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from gym_admin.domain.memberships import refund_eligibility
from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.models import RefundRequest
from gym_admin.infrastructure.database.repositories import MembershipRepository, RefundRequestRepository
from gym_admin.services.activity_log_service import ActivityLogService
from gym_admin.utils.date_utils import start_of_month

PROCESSABLE_STATUSES = ("requested", "approved")


class RefundService:
    def __init__(self, db: Session):
        self.db = db
        self.refunds = RefundRequestRepository(db)
        self.memberships = MembershipRepository(db)
        self.audit = ActivityLogService(db)

    def get_refund_requests(self, **filters) -> List[RefundRequest]:
        return self.refunds.list_requests(**filters)

    def get_refund_request(self, refund_id: uuid.UUID) -> RefundRequest:
        refund = self.refunds.get(refund_id)
        if not refund:
            raise NotFoundError("Refund request", refund_id)
        return refund

    def create_refund_request(self, data: Dict[str, Any], today: Optional[date] = None) -> RefundRequest:
        """Eligible amount defaults to the package's refund share of what was paid"""
        membership = self.memberships.get(data["membership_id"])
        if not membership:
            raise NotFoundError("Membership", data["membership_id"])

        values = dict(data)
        if values.get("eligible_amount_cents") is None:
            values["eligible_amount_cents"] = refund_eligibility(
                membership.amount_paid_cents, membership.package.refund_percentage
            )
        if values["requested_amount_cents"] > values["eligible_amount_cents"]:
            raise ValidationError(
                f"Requested {values['requested_amount_cents']} exceeds eligible {values['eligible_amount_cents']}"
            )

        values.update(
            gym_id=membership.member.gym_id,
            member_id=membership.member_id,
            request_date=today or date.today(),
            status="requested",
        )
        values.setdefault("refund_type", "membership_cancellation")
        return self.refunds.add(**values)

    def update_refund_request(self, refund_id: uuid.UUID, updates: Dict[str, Any]) -> RefundRequest:
        refund = self.get_refund_request(refund_id)
        return self.refunds.update(refund, updates)

    def process_refund_request(
        self,
        refund_id: uuid.UUID,
        approved_amount_cents: Optional[int] = None,
        processing_fee_cents: int = 0,
        refund_method: Optional[str] = None,
        transaction_reference: Optional[str] = None,
        admin_comments: Optional[str] = None,
        ctx: Optional[ActorContext] = None,
        today: Optional[date] = None,
    ) -> RefundRequest:
        refund = self.get_refund_request(refund_id)
        if refund.status not in PROCESSABLE_STATUSES:
            raise InvalidStateError(f"Refund request is already {refund.status}")

        approved = refund.requested_amount_cents if approved_amount_cents is None else approved_amount_cents
        if approved > refund.eligible_amount_cents:
            raise ValidationError("Approved amount exceeds the eligible amount")
        final = max(0, approved - processing_fee_cents)

        self.refunds.update(
            refund,
            {
                "approved_amount_cents": approved,
                "processing_fee_cents": processing_fee_cents,
                "final_refund_amount_cents": final,
                "refund_method": refund_method,
                "transaction_reference": transaction_reference,
                "admin_comments": admin_comments,
                "processed_date": today or date.today(),
                "status": "processed",
            },
        )

        membership = refund.membership
        self.memberships.update(
            membership,
            {"refund_processed_amount_cents": membership.refund_processed_amount_cents + final},
        )

        self.audit.create_log(
            refund.gym_id,
            "refund_request",
            refund.id,
            "refund",
            ctx,
            description=f"Refund of {final} cents processed",
            after_data={"final_refund_amount_cents": final, "membership_id": str(membership.id)},
        )
        return refund

    def reject_refund_request(self, refund_id: uuid.UUID, admin_comments: Optional[str] = None) -> RefundRequest:
        refund = self.get_refund_request(refund_id)
        if refund.status not in PROCESSABLE_STATUSES:
            raise InvalidStateError(f"Refund request is already {refund.status}")
        return self.refunds.update(refund, {"status": "rejected", "admin_comments": admin_comments})

    def get_refund_stats(self, gym_id: uuid.UUID, today: Optional[date] = None) -> Dict[str, int]:
        today = today or date.today()
        return {
            "total_requests": self.refunds.count(gym_id),
            "pending_requests": self.refunds.count(gym_id, status="requested"),
            "total_refunded_cents": self.refunds.total_refunded(gym_id),
            "this_month_refunds_cents": self.refunds.total_refunded(gym_id, since=start_of_month(today)),
        }
