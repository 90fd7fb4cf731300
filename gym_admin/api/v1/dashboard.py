"""/v1/dashboard - owner overview, income reporting and birthdays"""

import uuid
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.v1.schemas import BirthdayOut, IncomeRow, IncomeStatsOut, MonthlyIncome
from gym_admin.infrastructure.database.session import get_db
from gym_admin.services import DashboardService

router = APIRouter()


@router.get("/dashboard/owner", response_model=Dict[str, Any])
def owner_dashboard(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return DashboardService(db).get_owner_dashboard(gym_id)


@router.get("/dashboard/income", response_model=List[IncomeRow])
def income(
    gym_id: uuid.UUID = Query(...),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    payment_type: Optional[str] = Query(None),
    member_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
):
    """Paid payments only"""
    return DashboardService(db).get_income(
        gym_id, date_from=date_from, date_to=date_to, payment_type=payment_type, member_id=member_id
    )


@router.get("/dashboard/income/stats", response_model=IncomeStatsOut)
def income_stats(
    gym_id: uuid.UUID = Query(...),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    return DashboardService(db).get_income_stats(gym_id, date_from, date_to)


@router.get("/dashboard/income/monthly", response_model=List[MonthlyIncome])
def monthly_income(
    gym_id: uuid.UUID = Query(...),
    months: int = Query(12, ge=1, le=36),
    db: Session = Depends(get_db),
):
    return DashboardService(db).get_monthly_income_comparison(gym_id, months=months)


@router.get("/dashboard/birthdays", response_model=List[BirthdayOut])
def birthdays(
    gym_id: uuid.UUID = Query(...),
    window: Literal["today", "week", "month"] = Query("week"),
    db: Session = Depends(get_db),
):
    return DashboardService(db).get_upcoming_birthdays(gym_id, window=window)
