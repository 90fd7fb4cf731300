"""Aggregations behind the owner dashboard, package and income analytics"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Callable, Dict, Iterable, List, Tuple

from gym_admin.domain.models import IncomeStats
from gym_admin.utils.date_utils import add_months, month_key, next_anniversary, start_of_month

# payment_type -> IncomeStats field
INCOME_CATEGORIES = {
    "membership_fee": "membership_income_cents",
    "personal_training": "pt_income_cents",
    "addon_service": "addon_income_cents",
    "penalty": "penalty_income_cents",
    "setup_fee": "setup_fee_income_cents",
    "transfer_fee": "transfer_fee_income_cents",
    "upgrade_fee": "upgrade_fee_income_cents",
}

BIRTHDAY_WINDOWS = {"today": 0, "week": 7, "month": 30}


def sum_by(items: Iterable[Any], key: Callable[[Any], Any], value: Callable[[Any], int]) -> Dict[Any, int]:
    totals: Dict[Any, int] = defaultdict(int)
    for item in items:
        totals[key(item)] += value(item)
    return dict(totals)


def income_stats(payments: List[Dict[str, Any]], top_n: int = 10) -> IncomeStats:
    """
    Summarize paid payments.

    Each payment dict carries amount_cents, payment_type, payment_date,
    member_code and member_name.
    """
    breakdown = sum_by(payments, lambda p: p.get("payment_type") or "other", lambda p: p["amount_cents"])

    daily = sum_by(payments, lambda p: p["payment_date"], lambda p: p["amount_cents"])
    daily_income = [{"date": d, "amount_cents": amount} for d, amount in sorted(daily.items())]

    members: Dict[str, Dict[str, Any]] = {}
    for payment in payments:
        code = payment.get("member_code") or "Unknown"
        entry = members.setdefault(
            code,
            {
                "member_code": code,
                "member_name": payment.get("member_name") or "Unknown Member",
                "total_paid_cents": 0,
                "payment_count": 0,
            },
        )
        entry["total_paid_cents"] += payment["amount_cents"]
        entry["payment_count"] += 1

    top_paying = sorted(members.values(), key=lambda m: m["total_paid_cents"], reverse=True)[:top_n]

    per_category = {name: breakdown.get(ptype, 0) for ptype, name in INCOME_CATEGORIES.items()}

    return IncomeStats(
        total_income_cents=sum(p["amount_cents"] for p in payments),
        category_breakdown=breakdown,
        daily_income=daily_income,
        top_paying_members=top_paying,
        **per_category,
    )


def month_keys(today: date, months: int) -> List[str]:
    """Ascending YYYY-MM keys for the last `months` months, current month included"""
    first = add_months(start_of_month(today), -(months - 1))
    return [month_key(add_months(first, i)) for i in range(months)]


def monthly_comparison(
    income_by_month: Dict[str, int],
    expenses_by_month: Dict[str, int],
    keys: List[str],
) -> List[Dict[str, Any]]:
    rows = []
    for key in keys:
        income = income_by_month.get(key, 0)
        expenses = expenses_by_month.get(key, 0)
        rows.append(
            {
                "month": key,
                "income_cents": income,
                "expenses_cents": expenses,
                "profit_cents": income - expenses,
            }
        )
    return rows


def package_analytics(packages: List[Any], usage: Dict[Any, Tuple[int, int]]) -> Dict[str, Any]:
    """
    Package catalogue summary.

    `usage` maps package id -> (membership count, revenue cents).
    """
    prices = [p.price_cents for p in packages]

    popular = []
    for package in packages:
        count, revenue = usage.get(package.id, (0, 0))
        popular.append({"package": package, "member_count": count, "revenue_cents": revenue})
    popular.sort(key=lambda row: row["member_count"], reverse=True)

    return {
        "total_packages": len(packages),
        "active_packages": sum(1 for p in packages if p.is_active),
        "trial_packages": sum(1 for p in packages if p.is_trial),
        "featured_packages": sum(1 for p in packages if p.is_featured),
        "average_price_cents": round(sum(prices) / len(prices)) if prices else 0,
        "price_range": {"min": min(prices) if prices else 0, "max": max(prices) if prices else 0},
        "packages_by_type": sum_by(packages, lambda p: p.package_type, lambda p: 1),
        "packages_by_category": sum_by(packages, lambda p: p.package_category or "Uncategorized", lambda p: 1),
        "popular_packages": popular,
    }


def upcoming_birthdays(people: Iterable[Tuple[Any, date]], today: date, window: str) -> List[Tuple[Any, date]]:
    """
    People whose next birthday falls within the window, soonest first.

    Returns (person, next_birthday) pairs.
    """
    days = BIRTHDAY_WINDOWS[window]
    horizon = today + timedelta(days=days)

    upcoming = []
    for person, born in people:
        if born is None:
            continue
        birthday = next_anniversary(born, today)
        if birthday <= horizon:
            upcoming.append((person, birthday))

    upcoming.sort(key=lambda pair: pair[1])
    return upcoming


def average_attendance_percentage(daily_visitors: Dict[date, int], days: int, active_members: int) -> int:
    """Average share of active members present per day over the window"""
    if active_members <= 0 or days <= 0:
        return 0
    average_daily = sum(daily_visitors.values()) / days
    return round(average_daily / active_members * 100)
