"""Unit tests for membership lifecycle rules"""

import pytest
from datetime import date
from gym_admin.domain.exceptions import InvalidStateError, ValidationError
from gym_admin.domain.memberships import (
    changed_status,
    check_change_allowed,
    check_freeze_allowance,
    freeze_length,
    initial_status,
    pending_amount,
    refund_eligibility,
    require_status,
)


def test_pending_amount_never_negative():
    assert pending_amount(300000, 100000) == 200000
    assert pending_amount(300000, 350000) == 0


def test_initial_status():
    assert initial_status(True) == "trial"
    assert initial_status(False) == "active"


def test_freeze_length_is_inclusive():
    assert freeze_length(date(2024, 4, 1), date(2024, 4, 1)) == 1
    assert freeze_length(date(2024, 4, 1), date(2024, 4, 10)) == 10


def test_freeze_length_rejects_reversed_range():
    with pytest.raises(ValidationError):
        freeze_length(date(2024, 4, 10), date(2024, 4, 1))


def test_freeze_allowance():
    check_freeze_allowance(10, 5, 15)  # exactly uses it up

    with pytest.raises(ValidationError, match="5 days left"):
        check_freeze_allowance(6, 10, 15)
    with pytest.raises(ValidationError):
        check_freeze_allowance(1, 0, 0)


def test_change_allowed_follows_package_flags():
    check_change_allowed("upgrade", upgrade_allowed=True, downgrade_allowed=False)

    with pytest.raises(ValidationError):
        check_change_allowed("downgrade", upgrade_allowed=True, downgrade_allowed=False)
    with pytest.raises(ValidationError):
        check_change_allowed("upgrade", upgrade_allowed=False, downgrade_allowed=True)
    with pytest.raises(ValidationError):
        check_change_allowed("sidegrade", upgrade_allowed=True, downgrade_allowed=True)


def test_changed_status():
    assert changed_status("upgrade") == "upgraded"
    assert changed_status("downgrade") == "downgraded"


def test_require_status():
    require_status("active", ("active",), "freeze")

    with pytest.raises(InvalidStateError, match="Cannot freeze a membership that is cancelled"):
        require_status("cancelled", ("active",), "freeze")


def test_refund_eligibility():
    assert refund_eligibility(300000, 50.0) == 150000
    assert refund_eligibility(99999, 33.3) == 33300
    assert refund_eligibility(300000, 0.0) == 0
