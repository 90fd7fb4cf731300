"""Member onboarding, profile maintenance and trainer assignment"""

import uuid
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.analytics import average_attendance_percentage
from gym_admin.domain.attendance import build_qr_payload
from gym_admin.domain.exceptions import ConflictError, NotFoundError, ValidationError
from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.models import Member, Profile
from gym_admin.infrastructure.database.repositories import (
    AttendanceRepository,
    GymRepository,
    MemberRepository,
    MembershipRepository,
    PaymentRepository,
    ProfileRepository,
    StaffRepository,
)
from gym_admin.services.activity_log_service import ActivityLogService, snapshot
from gym_admin.utils.date_utils import start_of_month

PROFILE_FIELDS = (
    "user_id",
    "first_name",
    "last_name",
    "phone",
    "email",
    "date_of_birth",
    "gender",
    "address",
    "emergency_contact_name",
    "emergency_contact_phone",
)

STAT_STATUSES = ("active", "trial", "expired", "suspended", "pending_payment")

ATTENDANCE_WINDOW_DAYS = 30


class MemberService:
    def __init__(self, db: Session):
        self.db = db
        self.members = MemberRepository(db)
        self.profiles = ProfileRepository(db)
        self.gyms = GymRepository(db)
        self.staff = StaffRepository(db)
        self.memberships = MembershipRepository(db)
        self.payments = PaymentRepository(db)
        self.attendance = AttendanceRepository(db)
        self.audit = ActivityLogService(db)

    def get_members(self, **filters) -> List[Member]:
        return self.members.list_members(**filters)

    def get_member_by_id(self, member_id: uuid.UUID) -> Member:
        member = self.members.get(member_id)
        if not member:
            raise NotFoundError("Member", member_id)
        return member

    def _next_member_code(self, gym_id: uuid.UUID) -> str:
        sequence = self.members.count_for_gym(gym_id) + 1
        code = f"{settings.member_code_prefix}{sequence:06d}"
        while self.members.code_exists(gym_id, code):
            sequence += 1
            code = f"{settings.member_code_prefix}{sequence:06d}"
        return code

    def create_member(self, data: Dict[str, Any], ctx: Optional[ActorContext] = None) -> Member:
        """Create the profile and the member row in one step"""
        gym_id = data["gym_id"]
        if not self.gyms.get(gym_id):
            raise NotFoundError("Gym", gym_id)

        profile_values = {k: v for k, v in data.items() if k in PROFILE_FIELDS}
        member_values = {k: v for k, v in data.items() if k not in PROFILE_FIELDS}

        code = member_values.get("member_code")
        if code:
            if self.members.code_exists(gym_id, code):
                raise ConflictError(f"Member code {code} is already in use")
        else:
            member_values["member_code"] = self._next_member_code(gym_id)
        member_values.setdefault("joining_date", date.today())

        profile = self.profiles.add(**profile_values)
        member = self.members.add(profile_id=profile.id, **member_values)

        self.audit.create_log(
            gym_id,
            "member",
            member.id,
            "create",
            ctx,
            description=f"Member {member.member_code} created",
            after_data=snapshot(member),
        )
        return member

    def update_member(self, member_id: uuid.UUID, updates: Dict[str, Any], ctx: Optional[ActorContext] = None) -> Member:
        member = self.get_member_by_id(member_id)
        before = snapshot(member)

        code = updates.get("member_code")
        if code and code != member.member_code and self.members.code_exists(member.gym_id, code):
            raise ConflictError(f"Member code {code} is already in use")

        self.members.update(member, updates)

        action = "status_change" if "status" in updates else "update"
        self.audit.create_log(
            member.gym_id,
            "member",
            member.id,
            action,
            ctx,
            before_data=before,
            after_data=snapshot(member),
        )
        return member

    def update_profile(self, profile_id: uuid.UUID, updates: Dict[str, Any], ctx: Optional[ActorContext] = None) -> Profile:
        """Email belongs to the login account and is not changed from here"""
        profile = self.profiles.get(profile_id)
        if not profile:
            raise NotFoundError("Profile", profile_id)

        values = {k: v for k, v in updates.items() if k != "email"}
        before = snapshot(profile)
        self.profiles.update(profile, values)

        member = self.members.get_by_profile(profile_id)
        if member:
            self.audit.create_log(
                member.gym_id,
                "profile",
                profile.id,
                "update",
                ctx,
                before_data=before,
                after_data=snapshot(profile),
            )
        return profile

    def delete_member(self, member_id: uuid.UUID, ctx: Optional[ActorContext] = None) -> None:
        member = self.get_member_by_id(member_id)
        before = snapshot(member)
        gym_id, profile = member.gym_id, member.profile

        self.memberships.clear_transfer_links(member.id)
        self.members.delete(member)
        if profile is not None:
            self.profiles.delete(profile)

        self.audit.create_log(
            gym_id,
            "member",
            member_id,
            "delete",
            ctx,
            description=f"Member {before['member_code']} deleted",
            before_data=before,
        )

    def assign_trainer(self, member_id: uuid.UUID, trainer_id: uuid.UUID, ctx: Optional[ActorContext] = None) -> Member:
        member = self.get_member_by_id(member_id)
        trainer = self.staff.get(trainer_id)
        if not trainer:
            raise NotFoundError("Trainer", trainer_id)
        if trainer.role != "trainer" or trainer.status != "active":
            raise ValidationError(f"Staff member {trainer.employee_code} is not an active trainer")

        if (
            trainer.max_clients
            and member.assigned_trainer_id != trainer.id
            and self.members.count_for_trainer(trainer.id) >= trainer.max_clients
        ):
            raise ConflictError(f"Trainer {trainer.employee_code} already has {trainer.max_clients} clients")

        previous = member.assigned_trainer_id
        self.members.update(member, {"assigned_trainer_id": trainer.id})

        self.audit.create_log(
            member.gym_id,
            "member",
            member.id,
            "assign",
            ctx,
            description=f"Trainer {trainer.employee_code} assigned",
            before_data={"assigned_trainer_id": str(previous) if previous else None},
            after_data={"assigned_trainer_id": str(trainer.id)},
        )
        return member

    def unassign_trainer(self, member_id: uuid.UUID, ctx: Optional[ActorContext] = None) -> Member:
        member = self.get_member_by_id(member_id)
        previous = member.assigned_trainer_id
        self.members.update(member, {"assigned_trainer_id": None})

        self.audit.create_log(
            member.gym_id,
            "member",
            member.id,
            "unassign",
            ctx,
            before_data={"assigned_trainer_id": str(previous) if previous else None},
            after_data={"assigned_trainer_id": None},
        )
        return member

    def get_member_stats(self, gym_id: uuid.UUID, today: Optional[date] = None) -> Dict[str, int]:
        today = today or date.today()
        month_start = start_of_month(today)

        by_status = self.members.count_by_status(gym_id)
        stats = {status: by_status.get(status, 0) for status in STAT_STATUSES}

        window_start = today - timedelta(days=ATTENDANCE_WINDOW_DAYS - 1)
        visitors = self.attendance.daily_visitors(gym_id, window_start, today)

        stats.update(
            total=sum(by_status.values()),
            new_this_month=self.members.count_joined_since(gym_id, month_start),
            revenue_this_month_cents=self.payments.total(gym_id, date_from=month_start),
            pending_payments=self.memberships.count_with_pending(gym_id),
            average_attendance=average_attendance_percentage(visitors, ATTENDANCE_WINDOW_DAYS, stats["active"]),
        )
        return stats

    def generate_member_qr_data(self, member_id: uuid.UUID, now: Optional[datetime] = None) -> Dict[str, str]:
        member = self.get_member_by_id(member_id)
        return build_qr_payload(member.member_code, str(member.gym_id), now or datetime.now())
