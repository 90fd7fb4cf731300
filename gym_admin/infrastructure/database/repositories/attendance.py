"""Data access for member attendance"""

import uuid
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import (
    Member,
    MemberAttendance,
    Membership,
    MembershipPackage,
    Profile,
)
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class AttendanceRepository(BaseRepository):
    model = MemberAttendance

    def latest_for_member_on(self, member_id: uuid.UUID, day: date) -> Optional[MemberAttendance]:
        return (
            self.db.query(MemberAttendance)
            .filter(MemberAttendance.member_id == member_id, MemberAttendance.date == day)
            .order_by(MemberAttendance.check_in_time.desc())
            .first()
        )

    def list_attendance(
        self,
        gym_id: Optional[uuid.UUID] = None,
        member_id: Optional[uuid.UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        status: Optional[str] = None,
        package_type: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[MemberAttendance]:
        query = self.db.query(MemberAttendance)

        if gym_id:
            query = query.filter(MemberAttendance.gym_id == gym_id)
        if member_id:
            query = query.filter(MemberAttendance.member_id == member_id)
        if date_from:
            query = query.filter(MemberAttendance.date >= date_from)
        if date_to:
            query = query.filter(MemberAttendance.date <= date_to)

        if status == "checked_in":
            query = query.filter(MemberAttendance.check_out_time.is_(None))
        elif status == "checked_out":
            query = query.filter(
                MemberAttendance.check_out_time.isnot(None),
                MemberAttendance.auto_checkout.is_(False),
            )
        elif status == "auto_checkout":
            query = query.filter(MemberAttendance.auto_checkout.is_(True))

        if package_type:
            query = (
                query.join(Membership, Membership.id == MemberAttendance.membership_id)
                .join(MembershipPackage, MembershipPackage.id == Membership.package_id)
                .filter(MembershipPackage.package_type == package_type)
            )
        if search:
            pattern = f"%{search}%"
            query = (
                query.join(Member, Member.id == MemberAttendance.member_id)
                .join(Profile, Profile.id == Member.profile_id)
                .filter(
                    or_(
                        Member.member_code.ilike(pattern),
                        Profile.first_name.ilike(pattern),
                        Profile.last_name.ilike(pattern),
                        Profile.phone.ilike(pattern),
                    )
                )
            )

        query = query.order_by(MemberAttendance.check_in_time.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def between(self, gym_id: uuid.UUID, date_from: date, date_to: date) -> List[MemberAttendance]:
        return (
            self.db.query(MemberAttendance)
            .filter(
                MemberAttendance.gym_id == gym_id,
                MemberAttendance.date >= date_from,
                MemberAttendance.date <= date_to,
            )
            .order_by(MemberAttendance.check_in_time.asc())
            .all()
        )

    def open_before(self, cutoff: datetime, gym_id: Optional[uuid.UUID] = None) -> List[MemberAttendance]:
        query = self.db.query(MemberAttendance).filter(
            MemberAttendance.check_out_time.is_(None),
            MemberAttendance.check_in_time < cutoff,
        )
        if gym_id:
            query = query.filter(MemberAttendance.gym_id == gym_id)
        return query.all()

    def daily_visitors(self, gym_id: uuid.UUID, date_from: date, date_to: date) -> Dict[date, int]:
        """date -> distinct members checked in that day"""
        rows = (
            self.db.query(MemberAttendance.date, func.count(func.distinct(MemberAttendance.member_id)))
            .filter(
                MemberAttendance.gym_id == gym_id,
                MemberAttendance.date >= date_from,
                MemberAttendance.date <= date_to,
            )
            .group_by(MemberAttendance.date)
            .all()
        )
        return {day: count for day, count in rows}
