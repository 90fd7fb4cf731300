"""Data access for members and their profiles"""

import uuid
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import Member, Profile
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class ProfileRepository(BaseRepository):
    model = Profile


class MemberRepository(BaseRepository):
    model = Member

    def get_by_code(self, gym_id: uuid.UUID, member_code: str) -> Optional[Member]:
        return (
            self.db.query(Member)
            .filter(Member.gym_id == gym_id, Member.member_code == member_code)
            .first()
        )

    def list_by_code(self, member_code: str) -> List[Member]:
        """Members carrying this code in any gym; codes are only unique per gym"""
        return self.db.query(Member).filter(Member.member_code == member_code).all()

    def get_by_profile(self, profile_id: uuid.UUID) -> Optional[Member]:
        return self.db.query(Member).filter(Member.profile_id == profile_id).first()

    def code_exists(self, gym_id: uuid.UUID, member_code: str) -> bool:
        return (
            self.db.query(Member.id)
            .filter(Member.gym_id == gym_id, Member.member_code == member_code)
            .first()
            is not None
        )

    def count_for_gym(self, gym_id: uuid.UUID) -> int:
        return self.db.query(func.count(Member.id)).filter(Member.gym_id == gym_id).scalar() or 0

    def list_members(
        self,
        gym_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Member]:
        query = self.db.query(Member).join(Member.profile)

        if gym_id:
            query = query.filter(Member.gym_id == gym_id)
        if status:
            query = query.filter(Member.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Member.member_code.ilike(pattern),
                    Profile.first_name.ilike(pattern),
                    Profile.last_name.ilike(pattern),
                )
            )

        query = query.order_by(Member.created_at.desc())
        return self.paginate(query, page, limit).all()

    def count_by_status(self, gym_id: uuid.UUID) -> Dict[str, int]:
        rows = (
            self.db.query(Member.status, func.count(Member.id))
            .filter(Member.gym_id == gym_id)
            .group_by(Member.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_joined_since(self, gym_id: uuid.UUID, since: date) -> int:
        return (
            self.db.query(func.count(Member.id))
            .filter(Member.gym_id == gym_id, Member.joining_date >= since)
            .scalar()
            or 0
        )

    def list_for_trainer(self, trainer_id: uuid.UUID) -> List[Member]:
        return (
            self.db.query(Member)
            .filter(Member.assigned_trainer_id == trainer_id)
            .order_by(Member.created_at.desc())
            .all()
        )

    def count_for_trainer(self, trainer_id: uuid.UUID) -> int:
        return (
            self.db.query(func.count(Member.id))
            .filter(Member.assigned_trainer_id == trainer_id)
            .scalar()
            or 0
        )

    def list_with_birth_dates(self, gym_id: uuid.UUID) -> List[Member]:
        return (
            self.db.query(Member)
            .join(Member.profile)
            .filter(Member.gym_id == gym_id, Profile.date_of_birth.isnot(None))
            .all()
        )
