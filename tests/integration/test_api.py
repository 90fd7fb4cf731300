"""Integration tests for API endpoints"""

import uuid
from datetime import date, timedelta
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_request_duration_seconds" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health")
    assert uuid.UUID(response.headers["X-Request-ID"])


def test_request_id_passed_through(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "kiosk-7-0001"})
    assert response.headers["X-Request-ID"] == "kiosk-7-0001"


def test_metrics_use_route_template(client: TestClient, member):
    client.get(f"/v1/members/{member.id}")
    text = client.get("/metrics").text
    assert 'endpoint="/v1/members/{member_id}"' in text
    assert str(member.id) not in text


def test_recalculate_reports_request_id(client: TestClient, gym):
    response = client.post(
        "/v1/payments/recalculate", params={"gym_id": str(gym.id)}, headers={"X-Request-ID": "ops-42"}
    )
    assert response.json() == {"memberships_updated": 0, "request_id": "ops-42"}


def test_create_member_generates_code_and_audit_entry(client: TestClient, gym):
    response = client.post(
        "/v1/members",
        json={"gym_id": str(gym.id), "first_name": "Meera", "last_name": "Iyer", "phone": "+91 90000 12345"},
        headers={"X-Actor-User-Id": "owner-1"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["member_code"] == "MEM000001"
    assert data["status"] == "active"
    assert data["profile"]["first_name"] == "Meera"
    assert data["current_membership"] is None

    logs = client.get("/v1/activity-logs", params={"gym_id": str(gym.id), "resource_type": "member"}).json()
    assert len(logs) == 1
    assert logs[0]["action"] == "create"
    assert logs[0]["actor_user_id"] == "owner-1"
    assert logs[0]["resource_id"] == data["id"]


def test_duplicate_member_code_conflicts(client: TestClient, gym, member):
    response = client.post(
        "/v1/members",
        json={"gym_id": str(gym.id), "first_name": "Copy", "member_code": member.member_code},
    )
    assert response.status_code == 409


def test_member_not_found(client: TestClient):
    response = client.get(f"/v1/members/{uuid.uuid4()}")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_list_members_search(client: TestClient, gym, member):
    found = client.get("/v1/members", params={"gym_id": str(gym.id), "search": "Asha"}).json()
    missing = client.get("/v1/members", params={"gym_id": str(gym.id), "search": "Nobody"}).json()

    assert [m["id"] for m in found] == [str(member.id)]
    assert missing == []


def test_member_detail_shows_current_membership(client: TestClient, member, membership):
    data = client.get(f"/v1/members/{member.id}").json()
    assert data["current_membership"]["id"] == str(membership.id)


def test_update_profile_ignores_email(client: TestClient, member):
    profile_id = member.profile_id
    response = client.patch(
        f"/v1/profiles/{profile_id}",
        json={"phone": "+91 90000 99999", "email": "new@example.com"},
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "+91 90000 99999"
    assert response.json()["email"] is None


def test_delete_member(client: TestClient, member, membership):
    response = client.delete(f"/v1/members/{member.id}")

    assert response.status_code == 204
    assert client.get(f"/v1/members/{member.id}").status_code == 404
    assert client.get(f"/v1/memberships/{membership.id}").status_code == 404


def test_member_stats(client: TestClient, gym, member, membership):
    stats = client.get("/v1/members/stats", params={"gym_id": str(gym.id)}).json()

    assert stats["total"] == 1
    assert stats["active"] == 1
    assert stats["new_this_month"] == 1
    assert stats["pending_payments"] == 1


def test_member_qr_payload(client: TestClient, gym, member):
    data = client.get(f"/v1/members/{member.id}/qr").json()

    assert data["type"] == "gym_attendance"
    assert data["member_id"] == member.member_code
    assert data["gym_id"] == str(gym.id)


def test_package_catalogue(client: TestClient, gym, package):
    templates = client.get("/v1/packages/templates").json()
    assert len(templates) > 0

    created = client.post(
        "/v1/packages",
        json={"gym_id": str(gym.id), "name": "Annual", "duration_days": 365, "price_cents": 2400000},
    )
    assert created.status_code == 201

    copy = client.post(f"/v1/packages/{package.id}/duplicate").json()
    assert copy["name"] == "Monthly Standard (Copy)"
    assert copy["price_cents"] == 300000

    toggled = client.post(f"/v1/packages/{package.id}/toggle").json()
    assert toggled["is_active"] is False

    active = client.get("/v1/packages", params={"gym_id": str(gym.id), "is_active": True}).json()
    assert {p["name"] for p in active} == {"Annual", "Monthly Standard (Copy)"}

    analytics = client.get("/v1/packages/analytics", params={"gym_id": str(gym.id)}).json()
    assert analytics["total_packages"] == 3
    assert analytics["price_range"] == {"min": 300000, "max": 2400000}


def test_package_in_use_cannot_be_deleted(client: TestClient, package, membership):
    assert client.delete(f"/v1/packages/{package.id}").status_code == 409


def test_unused_package_can_be_deleted(client: TestClient, package):
    assert client.delete(f"/v1/packages/{package.id}").status_code == 204
    assert client.get(f"/v1/packages/{package.id}").status_code == 404


def test_membership_freeze_rules_over_http(client: TestClient, membership):
    today = date.today()
    too_long = client.post(
        f"/v1/memberships/{membership.id}/freeze",
        json={"freeze_start_date": str(today), "freeze_end_date": str(today + timedelta(days=20))},
    )
    assert too_long.status_code == 422

    ok = client.post(
        f"/v1/memberships/{membership.id}/freeze",
        json={"freeze_start_date": str(today), "freeze_end_date": str(today + timedelta(days=4))},
    )
    assert ok.status_code == 200
    assert ok.json()["status"] == "frozen"

    again = client.post(f"/v1/memberships/{membership.id}/unfreeze")
    assert again.json()["status"] == "active"


def test_payment_plan_and_membership_fee(client: TestClient, member, membership):
    plan = client.post(f"/v1/memberships/{membership.id}/payment-plan").json()
    assert len(plan["installments"]) == 12

    response = client.post(
        "/v1/payments",
        json={
            "member_id": str(member.id),
            "membership_id": str(membership.id),
            "payment_type": "membership_fee",
            "amount_cents": 25000,
            "payment_method": "upi",
        },
    )
    assert response.status_code == 201
    assert response.json()["installment_id"] == plan["installments"][0]["id"]

    summary = client.get(f"/v1/members/{member.id}/payment-summary").json()
    assert summary["paid_installments"] == 1
    assert summary["remaining_amount_cents"] == 275000

    installments = client.get(f"/v1/members/{member.id}/installments").json()
    assert installments[0]["status"] == "paid"

    membership_data = client.get(f"/v1/memberships/{membership.id}").json()
    assert membership_data["amount_paid_cents"] == 25000
    assert membership_data["amount_pending_cents"] == 275000


def test_pay_installment_twice_conflicts(client: TestClient, member, membership):
    plan = client.post(f"/v1/memberships/{membership.id}/payment-plan").json()
    installment_id = plan["installments"][0]["id"]
    body = {"paid_amount_cents": 25000, "payment_method": "cash"}

    assert client.post(f"/v1/installments/{installment_id}/pay", json=body).status_code == 200
    assert client.post(f"/v1/installments/{installment_id}/pay", json=body).status_code == 409


def test_standalone_payment_plan(client: TestClient, member):
    response = client.post(
        "/v1/payment-plans",
        json={
            "member_id": str(member.id),
            "total_amount_cents": 100005,
            "number_of_installments": 4,
            "installment_frequency": "weekly",
            "first_installment_date": "2024-05-06",
        },
    )

    assert response.status_code == 201
    plan = response.json()
    assert [i["amount_cents"] for i in plan["installments"]] == [25001, 25001, 25001, 25002]
    assert plan["last_installment_date"] == "2024-05-27"

    cancelled = client.post(f"/v1/payment-plans/{plan['id']}/cancel").json()
    assert cancelled["status"] == "cancelled"


def test_payment_for_other_members_membership_rejected(client: TestClient, gym, membership):
    other = client.post("/v1/members", json={"gym_id": str(gym.id), "first_name": "Kabir"}).json()
    response = client.post(
        "/v1/payments",
        json={
            "member_id": other["id"],
            "membership_id": str(membership.id),
            "payment_type": "membership_fee",
            "amount_cents": 1000,
            "payment_method": "cash",
        },
    )
    assert response.status_code == 422


def test_request_validation_errors(client: TestClient, member):
    response = client.post(
        "/v1/payments",
        json={"member_id": str(member.id), "payment_type": "bitcoin", "amount_cents": -5, "payment_method": "cash"},
    )
    assert response.status_code == 422


def test_member_update_rejects_null_for_required_fields(client: TestClient, member):
    for field in ("status", "joining_date"):
        response = client.patch(f"/v1/members/{member.id}", json={field: None})
        assert response.status_code == 422, field

    assert client.get(f"/v1/members/{member.id}").json()["status"] == "active"


def test_membership_update_rejects_null_end_date(client: TestClient, membership):
    response = client.patch(f"/v1/memberships/{membership.id}", json={"end_date": None})
    assert response.status_code == 422

