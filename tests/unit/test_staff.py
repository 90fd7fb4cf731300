"""Unit tests for staff schedule rules"""

import pytest
from gym_admin.domain.exceptions import ValidationError
from gym_admin.domain.staff import require_role, require_staff_status, validate_schedule


def test_validate_schedule_normalizes_days_and_drops_days_off():
    schedule = validate_schedule(
        {
            "Monday": {"start": "06:00", "end": "14:00"},
            "tuesday": {"start": "14:00", "end": "22:00"},
            "sunday": None,
        }
    )

    assert schedule == {
        "monday": {"start": "06:00", "end": "14:00"},
        "tuesday": {"start": "14:00", "end": "22:00"},
    }


@pytest.mark.parametrize(
    "schedule",
    [
        {"funday": {"start": "06:00", "end": "14:00"}},
        {"monday": {"start": "6:00", "end": "14:00"}},
        {"monday": {"start": "06:00", "end": "24:00"}},
        {"monday": {"start": "14:00", "end": "06:00"}},
        {"monday": {"start": "09:00", "end": "09:00"}},
        {"monday": {"end": "14:00"}},
    ],
)
def test_validate_schedule_rejects_bad_shifts(schedule):
    with pytest.raises(ValidationError):
        validate_schedule(schedule)


def test_roles_and_statuses():
    require_role("trainer")
    require_staff_status("on_leave")

    with pytest.raises(ValidationError):
        require_role("janitor")
    with pytest.raises(ValidationError):
        require_staff_status("fired")
