"""Data access for staff, trainer commission rules and trainer earnings"""

import uuid
from typing import List, Optional

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import Profile, Staff, TrainerCommissionRule, TrainerEarning
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class StaffRepository(BaseRepository):
    model = Staff

    def list_staff(
        self,
        gym_id: uuid.UUID,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Staff]:
        query = self.db.query(Staff).join(Staff.profile).filter(Staff.gym_id == gym_id)

        if role:
            query = query.filter(Staff.role == role)
        if status:
            query = query.filter(Staff.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Staff.employee_code.ilike(pattern),
                    Profile.first_name.ilike(pattern),
                    Profile.last_name.ilike(pattern),
                )
            )

        return query.order_by(Staff.created_at.desc()).all()

    def active_trainers(self, gym_id: uuid.UUID) -> List[Staff]:
        return (
            self.db.query(Staff)
            .filter(Staff.gym_id == gym_id, Staff.role == "trainer", Staff.status == "active")
            .order_by(Staff.created_at.asc())
            .all()
        )

    def code_exists(self, gym_id: uuid.UUID, employee_code: str) -> bool:
        return (
            self.db.query(Staff.id)
            .filter(Staff.gym_id == gym_id, Staff.employee_code == employee_code)
            .first()
            is not None
        )

    def count_for_gym(self, gym_id: uuid.UUID, status: Optional[str] = None) -> int:
        query = self.db.query(func.count(Staff.id)).filter(Staff.gym_id == gym_id)
        if status:
            query = query.filter(Staff.status == status)
        return query.scalar() or 0


class CommissionRuleRepository(BaseRepository):
    model = TrainerCommissionRule

    def active_rule(self, trainer_id: uuid.UUID, member_id: uuid.UUID) -> Optional[TrainerCommissionRule]:
        return (
            self.db.query(TrainerCommissionRule)
            .filter(
                TrainerCommissionRule.trainer_id == trainer_id,
                TrainerCommissionRule.member_id == member_id,
                TrainerCommissionRule.is_active.is_(True),
            )
            .order_by(TrainerCommissionRule.created_at.desc())
            .first()
        )

    def deactivate(self, trainer_id: uuid.UUID, member_id: uuid.UUID) -> int:
        rules = (
            self.db.query(TrainerCommissionRule)
            .filter(
                TrainerCommissionRule.trainer_id == trainer_id,
                TrainerCommissionRule.member_id == member_id,
                TrainerCommissionRule.is_active.is_(True),
            )
            .all()
        )
        for rule in rules:
            rule.is_active = False
        self.db.flush()
        return len(rules)


class TrainerEarningRepository(BaseRepository):
    model = TrainerEarning

    def for_trainer(
        self,
        trainer_id: uuid.UUID,
        month: Optional[str] = None,
        is_paid: Optional[bool] = None,
    ) -> List[TrainerEarning]:
        query = self.db.query(TrainerEarning).filter(TrainerEarning.trainer_id == trainer_id)
        if month:
            query = query.filter(TrainerEarning.earning_month == month)
        if is_paid is not None:
            query = query.filter(TrainerEarning.is_paid == is_paid)
        return query.order_by(TrainerEarning.earning_date.desc()).all()

    def for_session(self, training_session_id: uuid.UUID) -> List[TrainerEarning]:
        return (
            self.db.query(TrainerEarning)
            .filter(TrainerEarning.training_session_id == training_session_id)
            .all()
        )
