"""Unit tests for trainer commission arithmetic"""

from gym_admin.domain.commissions import calculate_trainer_fee, session_fee_from_membership


def test_per_session_commission_is_flat():
    assert calculate_trainer_fee("per_session", 50000, session_fee_cents=150000, total_sessions=10) == 50000


def test_percentage_commission_of_session_fee():
    assert calculate_trainer_fee("percentage", 40, session_fee_cents=150000, total_sessions=10) == 60000
    assert calculate_trainer_fee("percentage", 33.3, session_fee_cents=1000, total_sessions=10) == 333


def test_fixed_amount_is_spread_over_sessions():
    assert calculate_trainer_fee("fixed_amount", 100000, session_fee_cents=0, total_sessions=8) == 12500
    assert calculate_trainer_fee("fixed_amount", 100000, session_fee_cents=0, total_sessions=0) == 0


def test_no_rule_means_no_fee():
    assert calculate_trainer_fee(None, 0, session_fee_cents=150000, total_sessions=10) == 0
    assert calculate_trainer_fee("bonus", 500, session_fee_cents=150000, total_sessions=10) == 0


def test_session_fee_from_membership():
    assert session_fee_from_membership(1200000, 12) == 100000
    assert session_fee_from_membership(1000000, 12) == 83333
    assert session_fee_from_membership(1000000, 0) == 0
