"""Front-desk attendance: scan processing, statistics and auto-checkout"""

import logging
import uuid
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.config import settings
from gym_admin.domain.attendance import in_auto_checkout_window, parse_scan_code, peak_hour
from gym_admin.domain.exceptions import InvalidStateError, NotFoundError
from gym_admin.domain.models import AttendanceStats, ScanResult
from gym_admin.infrastructure.database.models import MemberAttendance
from gym_admin.infrastructure.database.repositories import (
    AttendanceRepository,
    GymRepository,
    MemberRepository,
    MembershipRepository,
)
from gym_admin.infrastructure.database.session import after_commit
from gym_admin.infrastructure.observability.logging import log_attendance_scan
from gym_admin.infrastructure.observability.metrics import attendance_scan_counter, auto_checkout_counter
from gym_admin.utils.date_utils import end_of_previous_day

logger = logging.getLogger(__name__)


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


class AttendanceService:
    def __init__(self, db: Session):
        self.db = db
        self.attendance = AttendanceRepository(db)
        self.members = MemberRepository(db)
        self.memberships = MembershipRepository(db)
        self.gyms = GymRepository(db)

    def _result(self, member_code: str, result: ScanResult) -> ScanResult:
        outcome = result.action if result.success else "refused"
        after_commit(self.db, lambda: attendance_scan_counter.labels(outcome=outcome).inc())
        log_attendance_scan(member_code, result.success, result.action, result.message)
        return result

    def process_attendance(
        self,
        code: str,
        gym_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        """
        Check a member in, or out if today's latest visit is still open.

        Member codes are numbered per gym, so the lookup is scoped to the
        scanning desk's gym or, failing that, the gym printed on the QR card.
        A typed code with neither is only accepted when no other gym uses it.

        Business refusals (unknown code, inactive member, wrong gym, no valid
        membership) come back as an unsuccessful ScanResult, not an exception.
        """
        now = now or datetime.now()
        today = now.date()
        scan = parse_scan_code(code)

        if gym_id and scan.expected_gym_id and scan.expected_gym_id != str(gym_id):
            return self._result(scan.member_code, ScanResult(False, "Member card was issued by a different gym"))

        if gym_id or scan.expected_gym_id:
            scope = gym_id or _as_uuid(scan.expected_gym_id)
            member = self.members.get_by_code(scope, scan.member_code) if scope else None
        else:
            matches = self.members.list_by_code(scan.member_code)
            if len(matches) > 1:
                return self._result(
                    scan.member_code,
                    ScanResult(False, f"Member {scan.member_code} exists in more than one gym; scan at the member's gym"),
                )
            member = matches[0] if matches else None

        if not member:
            return self._result(scan.member_code, ScanResult(False, f"Member {scan.member_code} not found"))

        if member.status != "active":
            return self._result(
                scan.member_code,
                ScanResult(False, f"Member status is {member.status}", member=member),
            )

        membership = self.memberships.current_for_member(member.id, today)
        if not membership:
            return self._result(
                scan.member_code,
                ScanResult(False, "No active membership found", member=member),
            )

        name = member.profile.full_name if member.profile else member.member_code
        latest = self.attendance.latest_for_member_on(member.id, today)

        if latest and latest.check_out_time is None:
            self.attendance.update(latest, {"check_out_time": now})
            result = ScanResult(True, f"{name} checked out", "check_out", member, membership, latest)
        else:
            record = self.attendance.add(
                gym_id=member.gym_id,
                member_id=member.id,
                membership_id=membership.id,
                date=today,
                check_in_time=now,
            )
            result = ScanResult(True, f"{name} checked in", "check_in", member, membership, record)

        return self._result(scan.member_code, result)

    def get_attendance(self, **filters) -> List[MemberAttendance]:
        if filters.get("status") == "all":
            filters["status"] = None
        return self.attendance.list_attendance(**filters)

    def get_attendance_stats(self, gym_id: uuid.UUID, today: Optional[date] = None) -> AttendanceStats:
        today = today or date.today()
        yesterday = today - timedelta(days=1)
        week_start = today - timedelta(days=6)

        records = self.attendance.between(gym_id, today - timedelta(days=29), today)
        today_records = [r for r in records if r.date == today]
        week_total = sum(1 for r in records if r.date >= week_start)

        return AttendanceStats(
            today_total=len(today_records),
            today_checked_in=sum(1 for r in today_records if r.check_out_time is None),
            yesterday_total=sum(1 for r in records if r.date == yesterday),
            week_total=week_total,
            month_total=len(records),
            average_daily=round(week_total / 7),
            auto_checkouts=sum(1 for r in today_records if r.auto_checkout),
            peak_hour=peak_hour(r.check_in_time for r in today_records),
        )

    def run_auto_checkout(self, gym_id: Optional[uuid.UUID] = None, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Close every visit still open from before today at the end of yesterday"""
        now = now or datetime.now()
        cutoff = end_of_previous_day(now)

        records = self.attendance.open_before(cutoff, gym_id)
        for record in records:
            record.check_out_time = cutoff
            record.auto_checkout = True
            record.notes = "Auto checkout"
        self.db.flush()

        if records:
            after_commit(self.db, lambda: auto_checkout_counter.inc(len(records)))
        logger.info(
            "Auto checkout completed",
            extra={"gym_id": str(gym_id) if gym_id else None, "count": len(records)},
        )
        return {"count": len(records), "message": f"Auto checked out {len(records)} members"}

    def run_scheduled_auto_checkout(self, now: Optional[datetime] = None) -> int:
        """Sweep every gym, but only inside the overnight window"""
        now = now or datetime.now()
        if not in_auto_checkout_window(now.hour, settings.auto_checkout_start_hour, settings.auto_checkout_end_hour):
            logger.info("Outside auto checkout window, skipping", extra={"hour": now.hour})
            return 0

        return sum(self.run_auto_checkout(gym.id, now)["count"] for gym in self.gyms.list_all())

    def get_auto_checkout_stats(
        self,
        gym_id: uuid.UUID,
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        today = (now or datetime.now()).date()
        records = self.attendance.between(gym_id, today - timedelta(days=days - 1), today)
        auto = [r for r in records if r.auto_checkout]
        by_date = Counter(r.date.isoformat() for r in auto)

        return {
            "days": days,
            "total_auto_checkouts": len(auto),
            "total_visits": len(records),
            "by_date": dict(sorted(by_date.items())),
        }

    def manual_checkout(
        self,
        attendance_id: uuid.UUID,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> MemberAttendance:
        record = self.attendance.get(attendance_id)
        if not record:
            raise NotFoundError("Attendance record", attendance_id)
        if record.check_out_time is not None:
            raise InvalidStateError("Member is already checked out")

        note = f"Manual checkout: {reason}" if reason else "Manual checkout by admin"
        return self.attendance.update(record, {"check_out_time": now or datetime.now(), "notes": note})
