"""/v1/attendance - QR / member-code scanning, visit history and auto checkout"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gym_admin.api.v1.schemas import (
    AttendanceOut,
    AttendanceStatsOut,
    AutoCheckoutRequest,
    AutoCheckoutResult,
    ManualCheckout,
    ScanRequest,
    ScanResponse,
)
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import AttendanceService

router = APIRouter()


@router.post("/attendance/scan", response_model=ScanResponse)
def scan(body: ScanRequest, request: Request, db: Session = Depends(get_db)):
    """
    Process one scan at the front desk.

    A refused scan (unknown member, inactive member, card from another gym,
    no current membership) is still a 200 with success=false so the kiosk
    can show the message.
    """
    request.state.step = "attendance_scan"
    with transaction(db):
        result = AttendanceService(db).process_attendance(body.code, gym_id=body.gym_id)
        response = ScanResponse.model_validate(result)
    return response


@router.get("/attendance", response_model=List[AttendanceOut])
def list_attendance(
    gym_id: Optional[uuid.UUID] = Query(None),
    member_id: Optional[uuid.UUID] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    status: Optional[str] = Query(None, description="checked_in, checked_out or all"),
    package_type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return AttendanceService(db).get_attendance(
        gym_id=gym_id,
        member_id=member_id,
        date_from=date_from,
        date_to=date_to,
        status=status,
        package_type=package_type,
        search=search,
        limit=limit,
    )


@router.get("/attendance/stats", response_model=AttendanceStatsOut)
def attendance_stats(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return AttendanceService(db).get_attendance_stats(gym_id)


@router.post("/attendance/auto-checkout", response_model=AutoCheckoutResult)
def auto_checkout(body: AutoCheckoutRequest, db: Session = Depends(get_db)):
    """Manual trigger; ignores the overnight window the scheduled job honours"""
    with transaction(db):
        result = AttendanceService(db).run_auto_checkout(body.gym_id)
    return result


@router.get("/attendance/auto-checkout/stats", response_model=Dict[str, Any])
def auto_checkout_stats(
    gym_id: uuid.UUID = Query(...),
    days: int = Query(7, ge=1, le=90),
    db: Session = Depends(get_db),
):
    return AttendanceService(db).get_auto_checkout_stats(gym_id, days=days)


@router.post("/attendance/{attendance_id}/checkout", response_model=AttendanceOut)
def manual_checkout(attendance_id: uuid.UUID, body: ManualCheckout, db: Session = Depends(get_db)):
    with transaction(db):
        record = AttendanceService(db).manual_checkout(attendance_id, reason=body.reason)
    return record
