"""Personal training sessions and the trainer earnings they generate"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.commissions import calculate_trainer_fee, session_fee_from_membership
from gym_admin.domain.exceptions import InvalidStateError, NotFoundError
from gym_admin.infrastructure.database.models import TrainingSession
from gym_admin.infrastructure.database.repositories import (
    CommissionRuleRepository,
    MemberRepository,
    MembershipRepository,
    StaffRepository,
    TrainerEarningRepository,
    TrainingSessionRepository,
)
from gym_admin.utils.date_utils import month_key


class PTService:
    def __init__(self, db: Session):
        self.db = db
        self.sessions = TrainingSessionRepository(db)
        self.members = MemberRepository(db)
        self.memberships = MembershipRepository(db)
        self.staff = StaffRepository(db)
        self.rules = CommissionRuleRepository(db)
        self.earnings = TrainerEarningRepository(db)

    def get_pt_sessions(self, member_id: uuid.UUID) -> List[TrainingSession]:
        return self.sessions.for_member(member_id)

    def get_session(self, session_id: uuid.UUID) -> TrainingSession:
        session = self.sessions.get(session_id)
        if not session:
            raise NotFoundError("Training session", session_id)
        return session

    def create_pt_session(self, data: Dict[str, Any]) -> TrainingSession:
        """
        Book a session, draw it from the membership's PT allowance and
        record what the trainer earns for it.

        Trainer fee comes from the active commission rule for the pair unless
        given explicitly.
        """
        member_id, trainer_id = data["member_id"], data["trainer_id"]
        if not self.members.get(member_id):
            raise NotFoundError("Member", member_id)
        if not self.staff.get(trainer_id):
            raise NotFoundError("Trainer", trainer_id)

        membership = None
        if data.get("membership_id"):
            membership = self.memberships.get(data["membership_id"])
            if not membership:
                raise NotFoundError("Membership", data["membership_id"])

        values = dict(data)
        values["session_number"] = self.sessions.highest_session_number(member_id) + 1
        values.setdefault("session_type", "personal_training")

        if not values.get("total_sessions"):
            allowance = membership.pt_sessions_remaining + membership.pt_sessions_used if membership else 0
            values["total_sessions"] = allowance or settings.default_pt_total_sessions

        if values.get("session_fee_cents") is None:
            values["session_fee_cents"] = (
                session_fee_from_membership(membership.total_amount_due_cents, values["total_sessions"])
                if membership
                else 0
            )

        rule = self.rules.active_rule(trainer_id, member_id)
        if values.get("trainer_fee_cents") is None:
            values["trainer_fee_cents"] = (
                calculate_trainer_fee(
                    rule.commission_type,
                    rule.commission_value,
                    values["session_fee_cents"],
                    values["total_sessions"],
                )
                if rule
                else 0
            )

        values["allowance_deducted"] = bool(membership and membership.pt_sessions_remaining > 0)
        session = self.sessions.add(**values)

        if membership:
            self.memberships.update(
                membership,
                {
                    "pt_sessions_remaining": max(0, membership.pt_sessions_remaining - 1),
                    "pt_sessions_used": membership.pt_sessions_used + 1,
                },
            )

        self.earnings.add(
            trainer_id=trainer_id,
            member_id=member_id,
            training_session_id=session.id,
            earning_type="session_conducted",
            base_amount_cents=session.session_fee_cents,
            commission_rate=rule.commission_value if rule and rule.commission_type == "percentage" else None,
            commission_amount_cents=session.trainer_fee_cents,
            earning_date=session.session_date,
            earning_month=month_key(session.session_date),
        )
        return session

    def update_pt_session(self, session_id: uuid.UUID, updates: Dict[str, Any]) -> TrainingSession:
        session = self.get_session(session_id)
        return self.sessions.update(session, updates)

    def delete_pt_session(self, session_id: uuid.UUID) -> None:
        """Unpaid earnings go with the session and the PT allowance is given back"""
        session = self.get_session(session_id)

        for earning in self.earnings.for_session(session.id):
            if not earning.is_paid:
                self.earnings.delete(earning)

        if session.membership_id and not session.cancelled:
            membership = self.memberships.get(session.membership_id)
            if membership:
                # sessions booked with nothing left never came off the allowance
                restored = 1 if session.allowance_deducted else 0
                self.memberships.update(
                    membership,
                    {
                        "pt_sessions_remaining": membership.pt_sessions_remaining + restored,
                        "pt_sessions_used": max(0, membership.pt_sessions_used - 1),
                    },
                )

        self.sessions.delete(session)

    def complete_session(
        self,
        session_id: uuid.UUID,
        session_rating: Optional[int] = None,
        member_feedback: Optional[str] = None,
        trainer_notes: Optional[str] = None,
    ) -> TrainingSession:
        session = self.get_session(session_id)
        if session.cancelled:
            raise InvalidStateError("Cannot complete a cancelled session")

        return self.sessions.update(
            session,
            {
                "completed": True,
                "session_rating": session_rating,
                "member_feedback": member_feedback,
                "trainer_notes": trainer_notes,
            },
        )

    def cancel_session(
        self,
        session_id: uuid.UUID,
        cancellation_reason: str,
        cancelled_by: Optional[str] = None,
        cancellation_fee_cents: int = 0,
    ) -> TrainingSession:
        session = self.get_session(session_id)
        if session.completed:
            raise InvalidStateError("Cannot cancel a completed session")

        return self.sessions.update(
            session,
            {
                "cancelled": True,
                "cancellation_reason": cancellation_reason,
                "cancelled_by": cancelled_by,
                "cancellation_fee_cents": cancellation_fee_cents,
            },
        )

    def get_trainer_sessions(
        self,
        trainer_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[TrainingSession]:
        return self.sessions.for_trainer(trainer_id, date_from, date_to)
