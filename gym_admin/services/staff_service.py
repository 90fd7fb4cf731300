"""Staff and trainer administration: roster, schedules, client load and commissions"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.commissions import COMMISSION_TYPES
from gym_admin.domain.exceptions import NotFoundError, ValidationError
from gym_admin.domain.models import ActorContext
from gym_admin.domain.staff import require_role, require_staff_status, validate_schedule
from gym_admin.infrastructure.database.models import Member, Staff, TrainerCommissionRule
from gym_admin.infrastructure.database.repositories import (
    CommissionRuleRepository,
    GymRepository,
    MemberRepository,
    ProfileRepository,
    StaffRepository,
    TrainerEarningRepository,
)
from gym_admin.services.activity_log_service import ActivityLogService, snapshot
from gym_admin.services.member_service import PROFILE_FIELDS


class StaffService:
    def __init__(self, db: Session):
        self.db = db
        self.staff = StaffRepository(db)
        self.profiles = ProfileRepository(db)
        self.gyms = GymRepository(db)
        self.members = MemberRepository(db)
        self.rules = CommissionRuleRepository(db)
        self.earnings = TrainerEarningRepository(db)
        self.audit = ActivityLogService(db)

    def get_staff(
        self,
        gym_id: uuid.UUID,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Staff]:
        return self.staff.list_staff(gym_id, role=role, status=status, search=search)

    def get_staff_member(self, staff_id: uuid.UUID) -> Staff:
        staff = self.staff.get(staff_id)
        if not staff:
            raise NotFoundError("Staff member", staff_id)
        return staff

    def _next_employee_code(self, gym_id: uuid.UUID) -> str:
        sequence = self.staff.count_for_gym(gym_id) + 1
        code = f"{settings.employee_code_prefix}{sequence:04d}"
        while self.staff.code_exists(gym_id, code):
            sequence += 1
            code = f"{settings.employee_code_prefix}{sequence:04d}"
        return code

    def create_staff(self, data: Dict[str, Any], ctx: Optional[ActorContext] = None) -> Staff:
        gym_id = data["gym_id"]
        if not self.gyms.get(gym_id):
            raise NotFoundError("Gym", gym_id)
        require_role(data["role"])

        profile_values = {k: v for k, v in data.items() if k in PROFILE_FIELDS}
        staff_values = {k: v for k, v in data.items() if k not in PROFILE_FIELDS}

        if staff_values.get("schedule"):
            staff_values["schedule"] = validate_schedule(staff_values["schedule"])
        if not staff_values.get("employee_code"):
            staff_values["employee_code"] = self._next_employee_code(gym_id)

        profile = self.profiles.add(**profile_values)
        staff = self.staff.add(profile_id=profile.id, **staff_values)

        self.audit.create_log(
            gym_id,
            "staff",
            staff.id,
            "create",
            ctx,
            description=f"{staff.role.capitalize()} {staff.employee_code} added",
            after_data=snapshot(staff),
        )
        return staff

    def update_staff(self, staff_id: uuid.UUID, updates: Dict[str, Any], ctx: Optional[ActorContext] = None) -> Staff:
        staff = self.get_staff_member(staff_id)
        values = dict(updates)
        if "role" in values:
            require_role(values["role"])
        if values.get("schedule"):
            values["schedule"] = validate_schedule(values["schedule"])

        before = snapshot(staff)
        self.staff.update(staff, values)
        self.audit.create_log(staff.gym_id, "staff", staff.id, "update", ctx, before_data=before, after_data=snapshot(staff))
        return staff

    def set_staff_status(self, staff_id: uuid.UUID, status: str, ctx: Optional[ActorContext] = None) -> Staff:
        require_staff_status(status)
        staff = self.get_staff_member(staff_id)
        previous = staff.status
        self.staff.update(staff, {"status": status})

        self.audit.create_log(
            staff.gym_id,
            "staff",
            staff.id,
            "status_change",
            ctx,
            before_data={"status": previous},
            after_data={"status": status},
        )
        return staff

    def get_active_trainers(self, gym_id: uuid.UUID) -> List[Dict[str, Any]]:
        return [{"id": t.id, "name": t.display_name} for t in self.staff.active_trainers(gym_id)]

    def get_trainer_clients(self, trainer_id: uuid.UUID) -> List[Member]:
        self.get_staff_member(trainer_id)
        return self.members.list_for_trainer(trainer_id)

    def set_commission_rule(
        self,
        trainer_id: uuid.UUID,
        member_id: uuid.UUID,
        commission_type: str,
        commission_value: float,
        package_id: Optional[uuid.UUID] = None,
    ) -> TrainerCommissionRule:
        """One active rule per trainer/member pair; a new rule retires the old one"""
        self.get_staff_member(trainer_id)
        if not self.members.get(member_id):
            raise NotFoundError("Member", member_id)
        if commission_type not in COMMISSION_TYPES:
            raise ValidationError(f"Unsupported commission type: {commission_type}")
        if commission_value < 0:
            raise ValidationError("commission_value must not be negative")

        self.rules.deactivate(trainer_id, member_id)
        return self.rules.add(
            trainer_id=trainer_id,
            member_id=member_id,
            package_id=package_id,
            commission_type=commission_type,
            commission_value=commission_value,
            is_active=True,
        )

    def get_trainer_earnings(self, trainer_id: uuid.UUID, month: Optional[str] = None) -> Dict[str, Any]:
        self.get_staff_member(trainer_id)
        rows = self.earnings.for_trainer(trainer_id, month)
        paid = sum(e.commission_amount_cents for e in rows if e.is_paid)
        total = sum(e.commission_amount_cents for e in rows)
        return {
            "earnings": rows,
            "total_cents": total,
            "paid_cents": paid,
            "unpaid_cents": total - paid,
        }

    def mark_earnings_paid(self, trainer_id: uuid.UUID, month: str) -> int:
        self.get_staff_member(trainer_id)
        rows = self.earnings.for_trainer(trainer_id, month, is_paid=False)
        for earning in rows:
            earning.is_paid = True
        self.db.flush()
        return len(rows)

    def get_staff_schedule(self, staff_id: uuid.UUID) -> Dict[str, Dict[str, str]]:
        return self.get_staff_member(staff_id).schedule or {}

    def update_staff_schedule(self, staff_id: uuid.UUID, schedule: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
        staff = self.get_staff_member(staff_id)
        self.staff.update(staff, {"schedule": validate_schedule(schedule)})
        return staff.schedule
