"""Data access for memberships and their change history"""

import uuid
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import Member, Membership, MembershipChange
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class MembershipRepository(BaseRepository):
    model = Membership

    def clear_transfer_links(self, member_id: uuid.UUID) -> None:
        """Forget a member on the transfer history of memberships they passed on or received"""
        for membership in (
            self.db.query(Membership)
            .filter(
                or_(
                    Membership.transferred_from_member_id == member_id,
                    Membership.transferred_to_member_id == member_id,
                )
            )
            .all()
        ):
            if membership.transferred_from_member_id == member_id:
                membership.transferred_from_member_id = None
            if membership.transferred_to_member_id == member_id:
                membership.transferred_to_member_id = None
        self.db.flush()

    def _for_gym(self, gym_id: Optional[uuid.UUID]):
        query = self.db.query(Membership)
        if gym_id:
            query = query.join(Member, Member.id == Membership.member_id).filter(Member.gym_id == gym_id)
        return query

    def list_memberships(
        self,
        gym_id: Optional[uuid.UUID] = None,
        member_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        package_id: Optional[uuid.UUID] = None,
        is_trial: Optional[bool] = None,
        start_date_from: Optional[date] = None,
        start_date_to: Optional[date] = None,
        end_date_from: Optional[date] = None,
        end_date_to: Optional[date] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Membership]:
        query = self._for_gym(gym_id)

        if member_id:
            query = query.filter(Membership.member_id == member_id)
        if status:
            query = query.filter(Membership.status == status)
        if package_id:
            query = query.filter(Membership.package_id == package_id)
        if is_trial is not None:
            query = query.filter(Membership.is_trial == is_trial)
        if start_date_from:
            query = query.filter(Membership.start_date >= start_date_from)
        if start_date_to:
            query = query.filter(Membership.start_date <= start_date_to)
        if end_date_from:
            query = query.filter(Membership.end_date >= end_date_from)
        if end_date_to:
            query = query.filter(Membership.end_date <= end_date_to)

        query = query.order_by(Membership.created_at.desc())
        return self.paginate(query, page, limit).all()

    def list_by_statuses(self, statuses: Iterable[str], gym_id: Optional[uuid.UUID] = None) -> List[Membership]:
        return self._for_gym(gym_id).filter(Membership.status.in_(list(statuses))).all()

    def expiring(self, until: date, gym_id: Optional[uuid.UUID] = None) -> List[Membership]:
        return (
            self._for_gym(gym_id)
            .filter(Membership.status == "active", Membership.end_date <= until)
            .order_by(Membership.end_date.asc())
            .all()
        )

    def trials(self, gym_id: Optional[uuid.UUID] = None) -> List[Membership]:
        return (
            self._for_gym(gym_id)
            .filter(Membership.is_trial.is_(True), Membership.status == "trial")
            .order_by(Membership.end_date.asc())
            .all()
        )

    def lapsed(self, today: date, gym_id: Optional[uuid.UUID] = None) -> List[Membership]:
        return self._for_gym(gym_id).filter(Membership.status == "active", Membership.end_date < today).all()

    def current_for_member(self, member_id: uuid.UUID, today: date) -> Optional[Membership]:
        """Active membership still inside its date range, latest end first"""
        return (
            self.db.query(Membership)
            .filter(
                Membership.member_id == member_id,
                Membership.status == "active",
                Membership.end_date >= today,
            )
            .order_by(Membership.end_date.desc())
            .first()
        )

    def count_by_status(self, gym_id: uuid.UUID, status: str) -> int:
        return self._for_gym(gym_id).filter(Membership.status == status).count()

    def total_paid(self, gym_id: uuid.UUID) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Membership.amount_paid_cents), 0))
            .join(Member, Member.id == Membership.member_id)
            .filter(Member.gym_id == gym_id)
            .scalar()
        )
        return int(total or 0)

    def total_pending(self, gym_id: uuid.UUID) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Membership.amount_pending_cents), 0))
            .join(Member, Member.id == Membership.member_id)
            .filter(Member.gym_id == gym_id)
            .scalar()
        )
        return int(total or 0)

    def count_with_pending(self, gym_id: uuid.UUID) -> int:
        return self._for_gym(gym_id).filter(Membership.amount_pending_cents > 0).count()


class MembershipChangeRepository(BaseRepository):
    model = MembershipChange

    def for_member(self, member_id: uuid.UUID) -> List[MembershipChange]:
        return (
            self.db.query(MembershipChange)
            .filter(MembershipChange.member_id == member_id)
            .order_by(MembershipChange.change_date.desc(), MembershipChange.created_at.desc())
            .all()
        )
