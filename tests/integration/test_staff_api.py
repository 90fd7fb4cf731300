"""Integration tests for staff, trainer assignment and personal training endpoints"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from gym_admin.utils.date_utils import month_key


@pytest.fixture
def pt_membership(client: TestClient, member, pt_package):
    response = client.post("/v1/memberships", json={"member_id": str(member.id), "package_id": str(pt_package.id)})
    assert response.status_code == 201
    return response.json()


def test_create_staff_generates_employee_code(client: TestClient, gym):
    response = client.post(
        "/v1/staff",
        json={
            "gym_id": str(gym.id),
            "first_name": "Nisha",
            "last_name": "Menon",
            "role": "receptionist",
            "schedule": {"Monday": {"start": "07:00", "end": "15:00"}},
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["employee_code"] == "EMP0001"
    assert data["schedule"] == {"monday": {"start": "07:00", "end": "15:00"}}
    assert data["profile"]["first_name"] == "Nisha"


def test_invalid_schedule_rejected(client: TestClient, trainer):
    response = client.put(f"/v1/staff/{trainer.id}/schedule", json={"monday": {"start": "18:00", "end": "09:00"}})
    assert response.status_code == 422


def test_schedule_replace_and_read(client: TestClient, trainer):
    body = {"tuesday": {"start": "06:00", "end": "12:00"}, "sunday": None}

    assert client.put(f"/v1/staff/{trainer.id}/schedule", json=body).json() == {
        "tuesday": {"start": "06:00", "end": "12:00"}
    }
    assert client.get(f"/v1/staff/{trainer.id}/schedule").json() == {"tuesday": {"start": "06:00", "end": "12:00"}}


def test_active_trainer_options(client: TestClient, gym, trainer):
    options = client.get("/v1/staff/trainers", params={"gym_id": str(gym.id)}).json()
    assert options == [{"id": str(trainer.id), "name": "Vikram Singh"}]

    client.post(f"/v1/staff/{trainer.id}/status", json={"status": "on_leave"})
    assert client.get("/v1/staff/trainers", params={"gym_id": str(gym.id)}).json() == []


def test_trainer_client_limit(client: TestClient, gym, member, trainer):
    others = [
        client.post("/v1/members", json={"gym_id": str(gym.id), "first_name": name}).json()
        for name in ("Kabir", "Zoya")
    ]

    assert client.post(f"/v1/members/{member.id}/trainer", json={"trainer_id": str(trainer.id)}).status_code == 200
    assert client.post(f"/v1/members/{others[0]['id']}/trainer", json={"trainer_id": str(trainer.id)}).status_code == 200

    full = client.post(f"/v1/members/{others[1]['id']}/trainer", json={"trainer_id": str(trainer.id)})
    assert full.status_code == 409

    clients = client.get(f"/v1/staff/{trainer.id}/clients").json()
    assert {c["id"] for c in clients} == {str(member.id), others[0]["id"]}

    client.delete(f"/v1/members/{member.id}/trainer")
    assert client.post(f"/v1/members/{others[1]['id']}/trainer", json={"trainer_id": str(trainer.id)}).status_code == 200


def test_pt_session_uses_commission_rule(client: TestClient, member, trainer, pt_membership):
    rule = client.post(
        f"/v1/staff/{trainer.id}/commission-rules",
        json={"member_id": str(member.id), "commission_type": "percentage", "commission_value": 40},
    )
    assert rule.status_code == 201

    today = date.today()
    response = client.post(
        "/v1/pt-sessions",
        json={
            "member_id": str(member.id),
            "trainer_id": str(trainer.id),
            "membership_id": pt_membership["id"],
            "session_date": today.isoformat(),
            "start_time": "07:00",
            "end_time": "08:00",
        },
    )

    assert response.status_code == 201
    session = response.json()
    assert session["session_number"] == 1
    assert session["total_sessions"] == 12
    assert session["session_fee_cents"] == 100000
    assert session["trainer_fee_cents"] == 40000

    membership = client.get(f"/v1/memberships/{pt_membership['id']}").json()
    assert membership["pt_sessions_remaining"] == 11
    assert membership["pt_sessions_used"] == 1

    month = month_key(today)
    earnings = client.get(f"/v1/staff/{trainer.id}/earnings", params={"month": month}).json()
    assert earnings["total_cents"] == 40000
    assert earnings["unpaid_cents"] == 40000

    sessions = client.get(f"/v1/staff/{trainer.id}/sessions").json()
    assert [s["id"] for s in sessions] == [session["id"]]
    assert [s["id"] for s in client.get(f"/v1/members/{member.id}/pt-sessions").json()] == [session["id"]]


def test_mark_earnings_paid(client: TestClient, member, trainer, pt_membership):
    today = date.today()
    client.post(
        "/v1/pt-sessions",
        json={
            "member_id": str(member.id),
            "trainer_id": str(trainer.id),
            "membership_id": pt_membership["id"],
            "session_date": today.isoformat(),
            "trainer_fee_cents": 35000,
        },
    )
    month = month_key(today)

    result = client.post(f"/v1/staff/{trainer.id}/earnings/mark-paid", json={"month": month}).json()
    assert result == {"marked_paid": 1}

    earnings = client.get(f"/v1/staff/{trainer.id}/earnings", params={"month": month}).json()
    assert earnings["paid_cents"] == 35000
    assert earnings["unpaid_cents"] == 0


def test_delete_pt_session_restores_allowance(client: TestClient, member, trainer, pt_membership):
    session = client.post(
        "/v1/pt-sessions",
        json={
            "member_id": str(member.id),
            "trainer_id": str(trainer.id),
            "membership_id": pt_membership["id"],
            "session_date": date.today().isoformat(),
            "trainer_fee_cents": 30000,
        },
    ).json()

    assert client.delete(f"/v1/pt-sessions/{session['id']}").status_code == 204

    membership = client.get(f"/v1/memberships/{pt_membership['id']}").json()
    assert membership["pt_sessions_remaining"] == 12
    assert membership["pt_sessions_used"] == 0
    assert client.get(f"/v1/staff/{trainer.id}/earnings").json()["total_cents"] == 0


def test_completed_session_cannot_be_cancelled(client: TestClient, member, trainer):
    session = client.post(
        "/v1/pt-sessions",
        json={"member_id": str(member.id), "trainer_id": str(trainer.id), "session_date": date.today().isoformat()},
    ).json()

    completed = client.post(f"/v1/pt-sessions/{session['id']}/complete", json={"session_rating": 5})
    assert completed.status_code == 200
    assert completed.json()["completed"] is True

    cancelled = client.post(f"/v1/pt-sessions/{session['id']}/cancel", json={"cancellation_reason": "Sick"})
    assert cancelled.status_code == 409


def test_deleting_session_booked_past_allowance_restores_nothing(client: TestClient, member, trainer, pt_membership):
    client.patch(f"/v1/memberships/{pt_membership['id']}", json={"pt_sessions_remaining": 0})
    session = client.post(
        "/v1/pt-sessions",
        json={
            "member_id": str(member.id),
            "trainer_id": str(trainer.id),
            "membership_id": pt_membership["id"],
            "session_date": date.today().isoformat(),
            "total_sessions": 12,
        },
    ).json()

    membership = client.get(f"/v1/memberships/{pt_membership['id']}").json()
    assert (membership["pt_sessions_remaining"], membership["pt_sessions_used"]) == (0, 1)

    assert client.delete(f"/v1/pt-sessions/{session['id']}").status_code == 204

    membership = client.get(f"/v1/memberships/{pt_membership['id']}").json()
    assert (membership["pt_sessions_remaining"], membership["pt_sessions_used"]) == (0, 0)
