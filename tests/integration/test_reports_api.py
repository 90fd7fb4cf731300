"""Integration tests for refunds, expenses and the owner dashboard"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from gym_admin.utils.date_utils import month_key


@pytest.fixture
def paid_membership(client: TestClient, member, membership):
    response = client.post(
        "/v1/payments",
        json={
            "member_id": str(member.id),
            "membership_id": str(membership.id),
            "payment_type": "membership_fee",
            "amount_cents": 100000,
            "payment_method": "cash",
        },
    )
    assert response.status_code == 201
    return membership


def test_refund_request_defaults_to_eligible_share(client: TestClient, paid_membership):
    response = client.post(
        "/v1/refunds",
        json={"membership_id": str(paid_membership.id), "requested_amount_cents": 40000, "reason": "Relocating"},
    )

    assert response.status_code == 201
    refund = response.json()
    assert refund["eligible_amount_cents"] == 50000
    assert refund["status"] == "requested"


def test_refund_above_eligible_rejected(client: TestClient, paid_membership):
    response = client.post(
        "/v1/refunds",
        json={"membership_id": str(paid_membership.id), "requested_amount_cents": 60000, "reason": "Relocating"},
    )
    assert response.status_code == 422


def test_process_refund(client: TestClient, gym, paid_membership):
    refund = client.post(
        "/v1/refunds",
        json={"membership_id": str(paid_membership.id), "requested_amount_cents": 40000, "reason": "Injury"},
    ).json()

    processed = client.post(
        f"/v1/refunds/{refund['id']}/process",
        json={"processing_fee_cents": 1000, "refund_method": "bank_transfer"},
        headers={"X-Actor-User-Id": "owner-1"},
    )
    assert processed.status_code == 200
    assert processed.json()["status"] == "processed"
    assert processed.json()["final_refund_amount_cents"] == 39000

    membership = client.get(f"/v1/memberships/{paid_membership.id}").json()
    assert membership["refund_processed_amount_cents"] == 39000

    stats = client.get("/v1/refunds/stats", params={"gym_id": str(gym.id)}).json()
    assert stats["total_requests"] == 1
    assert stats["pending_requests"] == 0
    assert stats["total_refunded_cents"] == 39000

    again = client.post(f"/v1/refunds/{refund['id']}/reject", json={"admin_comments": "Too late"})
    assert again.status_code == 409

    logs = client.get(
        "/v1/activity-logs", params={"gym_id": str(gym.id), "resource_type": "refund_request"}
    ).json()
    assert [log["action"] for log in logs] == ["refund"]


def test_expenses_and_summary(client: TestClient, gym):
    today = date.today()
    for category, amount in (("rent", 5000000), ("utilities", 800000), ("utilities", 200000)):
        response = client.post(
            "/v1/expenses",
            json={
                "gym_id": str(gym.id),
                "category": category,
                "description": f"{category} for {month_key(today)}",
                "amount_cents": amount,
                "expense_date": today.isoformat(),
            },
        )
        assert response.status_code == 201

    summary = client.get("/v1/expenses/summary", params={"gym_id": str(gym.id)}).json()
    assert summary == {"total_cents": 6000000, "by_category": {"rent": 5000000, "utilities": 1000000}}

    expenses = client.get("/v1/expenses", params={"gym_id": str(gym.id), "category": "rent"}).json()
    assert len(expenses) == 1
    assert client.delete(f"/v1/expenses/{expenses[0]['id']}").status_code == 204

    summary = client.get("/v1/expenses/summary", params={"gym_id": str(gym.id)}).json()
    assert summary["total_cents"] == 1000000


def test_owner_dashboard_and_monthly_profit(client: TestClient, gym, paid_membership):
    today = date.today()
    client.post(
        "/v1/expenses",
        json={"gym_id": str(gym.id), "category": "rent", "description": "Rent", "amount_cents": 30000},
    )

    dashboard = client.get("/v1/dashboard/owner", params={"gym_id": str(gym.id)}).json()
    assert dashboard["members"] == {"total": 1, "active": 1, "trial": 0}
    assert dashboard["payments"]["this_month_revenue_cents"] == 100000
    assert dashboard["payments"]["today_revenue_cents"] == 100000
    assert dashboard["payments"]["pending_amount_cents"] == 200000
    assert dashboard["this_month_expenses_cents"] == 30000
    assert dashboard["net_profit_cents"] == 70000

    monthly = client.get("/v1/dashboard/income/monthly", params={"gym_id": str(gym.id), "months": 3}).json()
    assert len(monthly) == 3
    assert monthly[-1] == {
        "month": month_key(today),
        "income_cents": 100000,
        "expenses_cents": 30000,
        "profit_cents": 70000,
    }
    assert monthly[0]["income_cents"] == 0

    income = client.get("/v1/dashboard/income", params={"gym_id": str(gym.id)}).json()
    assert len(income) == 1
    assert income[0]["member_name"] == "Asha Rao"

    stats = client.get("/v1/dashboard/income/stats", params={"gym_id": str(gym.id)}).json()
    assert stats["total_income_cents"] == 100000
    assert stats["membership_income_cents"] == 100000


def test_upcoming_birthdays(client: TestClient, gym):
    soon = date.today() + timedelta(days=2)
    born = date(1992, soon.month, soon.day)
    client.post("/v1/members", json={"gym_id": str(gym.id), "first_name": "Rhea", "date_of_birth": born.isoformat()})

    week = client.get("/v1/dashboard/birthdays", params={"gym_id": str(gym.id), "window": "week"}).json()
    today_only = client.get("/v1/dashboard/birthdays", params={"gym_id": str(gym.id), "window": "today"}).json()

    assert len(week) == 1
    assert week[0]["days_until"] == 2
    assert week[0]["turning"] == soon.year - 1992
    assert today_only == []


def test_unknown_birthday_window(client: TestClient, gym):
    response = client.get("/v1/dashboard/birthdays", params={"gym_id": str(gym.id), "window": "year"})
    assert response.status_code == 422
