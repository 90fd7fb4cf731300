"""/v1/staff - roster, trainer clients, commission rules and earnings"""

import uuid
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.dependencies import get_actor
from gym_admin.api.v1.schemas import (
    CommissionRuleCreate,
    CommissionRuleOut,
    EarningsMarkPaid,
    EarningsOut,
    MemberOut,
    PTSessionOut,
    Shift,
    StaffCreate,
    StaffOut,
    StaffStatusUpdate,
    StaffUpdate,
    TrainerOption,
)
from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import PTService, StaffService

router = APIRouter()


@router.get("/staff", response_model=List[StaffOut])
def list_staff(
    gym_id: uuid.UUID = Query(...),
    role: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return StaffService(db).get_staff(gym_id, role=role, status=status, search=search)


@router.post("/staff", response_model=StaffOut, status_code=201)
def create_staff(
    body: StaffCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        staff = StaffService(db).create_staff(body.model_dump(exclude_none=True), actor)
    return staff


@router.get("/staff/trainers", response_model=List[TrainerOption])
def active_trainers(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return StaffService(db).get_active_trainers(gym_id)


@router.get("/staff/{staff_id}", response_model=StaffOut)
def get_staff_member(staff_id: uuid.UUID, db: Session = Depends(get_db)):
    return StaffService(db).get_staff_member(staff_id)


@router.patch("/staff/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: uuid.UUID,
    body: StaffUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        staff = StaffService(db).update_staff(staff_id, body.model_dump(exclude_unset=True), actor)
    return staff


@router.post("/staff/{staff_id}/status", response_model=StaffOut)
def set_staff_status(
    staff_id: uuid.UUID,
    body: StaffStatusUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        staff = StaffService(db).set_staff_status(staff_id, body.status, actor)
    return staff


@router.get("/staff/{staff_id}/schedule", response_model=Dict[str, Shift])
def get_schedule(staff_id: uuid.UUID, db: Session = Depends(get_db)):
    return StaffService(db).get_staff_schedule(staff_id)


@router.put("/staff/{staff_id}/schedule", response_model=Dict[str, Shift])
def replace_schedule(
    staff_id: uuid.UUID,
    body: Dict[str, Optional[Shift]],
    db: Session = Depends(get_db),
):
    """Replace the weekly schedule; a null day is a day off"""
    schedule = {day: shift.model_dump() if shift else None for day, shift in body.items()}
    with transaction(db):
        result = StaffService(db).update_staff_schedule(staff_id, schedule)
    return result


@router.get("/staff/{staff_id}/clients", response_model=List[MemberOut])
def trainer_clients(staff_id: uuid.UUID, db: Session = Depends(get_db)):
    return StaffService(db).get_trainer_clients(staff_id)


@router.post("/staff/{staff_id}/commission-rules", response_model=CommissionRuleOut, status_code=201)
def set_commission_rule(staff_id: uuid.UUID, body: CommissionRuleCreate, db: Session = Depends(get_db)):
    with transaction(db):
        rule = StaffService(db).set_commission_rule(staff_id, **body.model_dump())
    return rule


@router.get("/staff/{staff_id}/earnings", response_model=EarningsOut)
def trainer_earnings(
    staff_id: uuid.UUID,
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    db: Session = Depends(get_db),
):
    return StaffService(db).get_trainer_earnings(staff_id, month)


@router.post("/staff/{staff_id}/earnings/mark-paid", response_model=Dict[str, int])
def mark_earnings_paid(staff_id: uuid.UUID, body: EarningsMarkPaid, db: Session = Depends(get_db)):
    with transaction(db):
        count = StaffService(db).mark_earnings_paid(staff_id, body.month)
    return {"marked_paid": count}


@router.get("/staff/{staff_id}/sessions", response_model=List[PTSessionOut])
def trainer_sessions(
    staff_id: uuid.UUID,
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    StaffService(db).get_staff_member(staff_id)
    return PTService(db).get_trainer_sessions(staff_id, date_from, date_to)
