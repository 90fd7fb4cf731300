"""
E2E tests for typical member journeys through the front desk and the owner's screens.

Journeys:
- newcomer: joins on a monthly plan, pays in installments, checks in
- trial: walks in on a free trial, converts to a paid plan
- traveller: freezes mid-term, comes back, end date moves out
- coached: upgrades to a PT plan with a trainer, books sessions
- leaver: cancels and gets part of the fee back
"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from gym_admin.infrastructure.database.models import MembershipPackage


def _join(client: TestClient, gym, package, first_name: str) -> dict:
    member = client.post("/v1/members", json={"gym_id": str(gym.id), "first_name": first_name}).json()
    membership = client.post(
        "/v1/memberships", json={"member_id": member["id"], "package_id": str(package.id)}
    ).json()
    return {"member": member, "membership": membership}


@pytest.mark.integration
def test_newcomer_pays_in_installments_and_checks_in(client: TestClient, gym, package):
    """
    newcomer: monthly plan split into 12 installments
    Expected: first payment settles installment 1, card scan lets them in
    """
    joined = _join(client, gym, package, "Dev")
    member_id, membership_id = joined["member"]["id"], joined["membership"]["id"]

    plan = client.post(f"/v1/memberships/{membership_id}/payment-plan").json()
    assert sum(i["amount_cents"] for i in plan["installments"]) == 300000

    client.post(
        "/v1/payments",
        json={
            "member_id": member_id,
            "membership_id": membership_id,
            "payment_type": "membership_fee",
            "amount_cents": 25000,
            "payment_method": "upi",
        },
    )

    summary = client.get(f"/v1/members/{member_id}/payment-summary").json()
    assert summary["paid_installments"] == 1
    assert summary["next_due_amount_cents"] == 25000

    scan = client.post("/v1/attendance/scan", json={"code": joined["member"]["member_code"]}).json()
    assert scan["success"] is True, "paid-up member should get in"
    assert scan["action"] == "check_in"


@pytest.mark.integration
def test_trial_member_converts(client: TestClient, db: Session, gym, package):
    """
    trial: free 7 day trial
    Expected: nothing to collect during the trial, active on the paid package afterwards
    """
    trial = MembershipPackage(gym_id=gym.id, name="Free Week", duration_days=7, price_cents=0, is_trial=True)
    db.add(trial)
    db.commit()

    joined = _join(client, gym, trial, "Tara")
    membership_id = joined["membership"]["id"]
    assert joined["membership"]["status"] == "trial"

    trials = client.get("/v1/memberships/trials", params={"gym_id": str(gym.id)}).json()
    assert [m["id"] for m in trials] == [membership_id]
    assert client.post(f"/v1/memberships/{membership_id}/payment-plan").json() is None

    converted = client.post(
        f"/v1/memberships/{membership_id}/convert-trial",
        json={"new_package_id": str(package.id), "trial_conversion_discount_cents": 20000},
    ).json()
    assert converted["status"] == "active"
    assert converted["is_trial"] is False


@pytest.mark.integration
def test_traveller_freezes_and_returns(client: TestClient, gym, package):
    """
    traveller: away for a week
    Expected: end date moves by the frozen days, scans refused while frozen
    """
    joined = _join(client, gym, package, "Ira")
    membership = joined["membership"]
    start = date.today()

    frozen = client.post(
        f"/v1/memberships/{membership['id']}/freeze",
        json={"freeze_start_date": start.isoformat(), "freeze_end_date": (start + timedelta(days=6)).isoformat()},
    ).json()
    assert frozen["freeze_days_used"] == 7
    assert frozen["end_date"] == (date.fromisoformat(membership["end_date"]) + timedelta(days=7)).isoformat()

    scan = client.post("/v1/attendance/scan", json={"code": joined["member"]["member_code"]}).json()
    assert scan["success"] is False, "frozen membership should not admit"

    back = client.post(f"/v1/memberships/{membership['id']}/unfreeze").json()
    assert back["status"] == "active"
    scan = client.post("/v1/attendance/scan", json={"code": joined["member"]["member_code"]}).json()
    assert scan["success"] is True


@pytest.mark.integration
def test_coached_member_upgrades_with_trainer(client: TestClient, gym, package, pt_package, trainer):
    """
    coached: upgrades to the quarterly PT plan
    Expected: old membership closed, trainer assigned, sessions drawn from the new allowance
    """
    joined = _join(client, gym, package, "Om")
    member_id = joined["member"]["id"]

    result = client.post(
        f"/v1/memberships/{joined['membership']['id']}/change",
        json={
            "new_package_id": str(pt_package.id),
            "change_type": "upgrade",
            "additional_payment_cents": 900000,
            "new_trainer_id": str(trainer.id),
        },
    ).json()
    assert result["old_membership"]["status"] == "upgraded"
    assert result["new_membership"]["pt_sessions_remaining"] == 12

    member = client.get(f"/v1/members/{member_id}").json()
    assert member["assigned_trainer_id"] == str(trainer.id)
    assert member["current_membership"]["id"] == result["new_membership"]["id"]

    client.post(
        "/v1/pt-sessions",
        json={
            "member_id": member_id,
            "trainer_id": str(trainer.id),
            "membership_id": result["new_membership"]["id"],
            "session_date": date.today().isoformat(),
        },
    )
    refreshed = client.get(f"/v1/memberships/{result['new_membership']['id']}").json()
    assert refreshed["pt_sessions_remaining"] == 11

    changes = client.get(f"/v1/members/{member_id}/membership-changes").json()
    assert [c["change_type"] for c in changes] == ["upgrade"]


@pytest.mark.integration
def test_leaver_cancels_and_is_refunded(client: TestClient, gym, package):
    """
    leaver: paid in full, cancels a few days in
    Expected: refund capped at the package's refundable share
    """
    joined = _join(client, gym, package, "Sam")
    member_id, membership_id = joined["member"]["id"], joined["membership"]["id"]

    client.post(
        "/v1/payments",
        json={
            "member_id": member_id,
            "membership_id": membership_id,
            "payment_type": "membership_fee",
            "amount_cents": 300000,
            "payment_method": "card",
        },
    )
    cancelled = client.post(
        f"/v1/memberships/{membership_id}/cancel", json={"cancellation_reason": "Moving abroad"}
    ).json()
    assert cancelled["status"] == "cancelled"

    refund = client.post(
        "/v1/refunds",
        json={"membership_id": membership_id, "requested_amount_cents": 150000, "reason": "Moving abroad"},
    ).json()
    assert refund["eligible_amount_cents"] == 150000

    processed = client.post(f"/v1/refunds/{refund['id']}/process", json={}).json()
    assert processed["final_refund_amount_cents"] == 150000

    scan = client.post("/v1/attendance/scan", json={"code": joined["member"]["member_code"]}).json()
    assert scan["success"] is False
