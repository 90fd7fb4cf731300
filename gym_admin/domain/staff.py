"""Staff roster rules: roles, statuses and weekly shift schedules"""

import re
from typing import Any, Dict

from gym_admin.domain.exceptions import ValidationError

STAFF_ROLES = ("manager", "trainer", "nutritionist", "receptionist", "housekeeping")
STAFF_STATUSES = ("active", "inactive", "terminated", "on_leave", "probation")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_schedule(schedule: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """
    Normalize a weekly schedule: weekday -> {"start": "HH:MM", "end": "HH:MM"}.

    Days set to None are days off and are dropped. Shifts must start before
    they end; overnight shifts are not supported.
    """
    normalized = {}
    for day, shift in schedule.items():
        key = day.lower()
        if key not in WEEKDAYS:
            raise ValidationError(f"Unknown weekday: {day}")
        if shift is None:
            continue

        start, end = shift.get("start"), shift.get("end")
        for value in (start, end):
            if not isinstance(value, str) or not _HHMM.match(value):
                raise ValidationError(f"Invalid time for {key}: {value!r} (expected HH:MM)")
        # zero-padded HH:MM compares correctly as text
        if start >= end:
            raise ValidationError(f"Shift on {key} must start before it ends")

        normalized[key] = {"start": start, "end": end}
    return normalized


def require_role(staff_role: str) -> None:
    if staff_role not in STAFF_ROLES:
        raise ValidationError(f"Unknown staff role: {staff_role}")


def require_staff_status(status: str) -> None:
    if status not in STAFF_STATUSES:
        raise ValidationError(f"Unknown staff status: {status}")
