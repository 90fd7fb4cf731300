"""Attendance scan decoding and check-in statistics"""

import json
from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

from gym_admin.domain.models import ScanCode

QR_TYPE = "gym_attendance"

# Older member cards were printed with this type; still accepted on scan
ACCEPTED_QR_TYPES = (QR_TYPE, "gym_member")

DEFAULT_PEAK_HOUR = "9:00"


def parse_scan_code(raw: str) -> ScanCode:
    """
    Decode scanner input.

    A QR payload is JSON carrying `type`, `member_id` (the member code) and
    `gym_id`; anything else is treated as a typed member code.
    """
    code = raw.strip()
    try:
        payload = json.loads(code)
    except ValueError:
        return ScanCode(member_code=code)

    if isinstance(payload, dict) and payload.get("type") in ACCEPTED_QR_TYPES and payload.get("member_id"):
        gym_id = payload.get("gym_id")
        return ScanCode(member_code=str(payload["member_id"]), expected_gym_id=str(gym_id) if gym_id else None)

    return ScanCode(member_code=code)


def build_qr_payload(member_code: str, gym_id: str, generated_at: datetime) -> dict:
    return {
        "type": QR_TYPE,
        "member_id": member_code,
        "gym_id": gym_id,
        "generated_at": generated_at.isoformat(),
    }


def peak_hour(check_in_times: Iterable[Optional[datetime]]) -> str:
    """Hour bucket ("H:00") with most check-ins; first bucket seen wins ties"""
    counts = Counter(f"{t.hour}:00" for t in check_in_times if t is not None)
    if not counts:
        return DEFAULT_PEAK_HOUR
    # Counter.most_common keeps insertion order among equal counts
    return counts.most_common(1)[0][0]


def attendance_state(check_out_time: Optional[datetime], auto_checkout: bool) -> str:
    if check_out_time is None:
        return "checked_in"
    return "auto_checkout" if auto_checkout else "checked_out"


def in_auto_checkout_window(hour: int, start_hour: int, end_hour: int) -> bool:
    """Window wraps midnight: [start_hour, 24) U [0, end_hour)"""
    return hour >= start_hour or hour < end_hour
