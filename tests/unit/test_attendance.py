"""Unit tests for scan decoding and attendance statistics"""

import json
from datetime import datetime
from gym_admin.domain.attendance import (
    attendance_state,
    build_qr_payload,
    in_auto_checkout_window,
    parse_scan_code,
    peak_hour,
)


def test_plain_member_code_is_trimmed():
    scan = parse_scan_code("  MEM000042 \n")

    assert scan.member_code == "MEM000042"
    assert scan.expected_gym_id is None


def test_qr_payload_carries_member_code_and_gym():
    raw = json.dumps({"type": "gym_attendance", "member_id": "MEM000042", "gym_id": "g-1"})
    scan = parse_scan_code(raw)

    assert scan.member_code == "MEM000042"
    assert scan.expected_gym_id == "g-1"


def test_legacy_card_type_is_accepted():
    raw = json.dumps({"type": "gym_member", "member_id": "MEM000007"})
    scan = parse_scan_code(raw)

    assert scan.member_code == "MEM000007"
    assert scan.expected_gym_id is None


def test_unrelated_json_is_treated_as_a_code():
    raw = json.dumps({"type": "wifi", "ssid": "gym"})
    assert parse_scan_code(raw).member_code == raw

    # Numeric codes parse as JSON numbers but are still codes
    assert parse_scan_code("123456").member_code == "123456"


def test_build_qr_payload_round_trips_through_parser():
    payload = build_qr_payload("MEM000042", "g-1", datetime(2024, 5, 1, 9, 30))
    scan = parse_scan_code(json.dumps(payload))

    assert payload["generated_at"] == "2024-05-01T09:30:00"
    assert (scan.member_code, scan.expected_gym_id) == ("MEM000042", "g-1")


def test_peak_hour_first_seen_wins_ties():
    times = [
        datetime(2024, 5, 1, 10, 5),
        datetime(2024, 5, 1, 9, 10),
        datetime(2024, 5, 1, 10, 30),
        datetime(2024, 5, 1, 9, 45),
        datetime(2024, 5, 1, 18, 0),
    ]
    assert peak_hour(times) == "10:00"


def test_peak_hour_defaults_when_no_visits():
    assert peak_hour([]) == "9:00"
    assert peak_hour([None]) == "9:00"


def test_attendance_state():
    assert attendance_state(None, False) == "checked_in"
    assert attendance_state(datetime(2024, 5, 1, 11), False) == "checked_out"
    assert attendance_state(datetime(2024, 5, 1, 23, 59), True) == "auto_checkout"


def test_auto_checkout_window_wraps_midnight():
    assert in_auto_checkout_window(23, 23, 6)
    assert in_auto_checkout_window(0, 23, 6)
    assert in_auto_checkout_window(5, 23, 6)
    assert not in_auto_checkout_window(6, 23, 6)
    assert not in_auto_checkout_window(14, 23, 6)
