"""/v1/payments - payment recording and revenue stats"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gym_admin.api.dependencies import get_request_id
from gym_admin.api.v1.schemas import PaymentCreate, PaymentOut, PaymentUpdate
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import PaymentService

router = APIRouter()


@router.get("/payments", response_model=List[PaymentOut])
def list_payments(
    gym_id: Optional[uuid.UUID] = Query(None),
    member_id: Optional[uuid.UUID] = Query(None),
    membership_id: Optional[uuid.UUID] = Query(None),
    status: Optional[str] = Query(None),
    payment_type: Optional[str] = Query(None),
    payment_method: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return PaymentService(db).get_payments(
        gym_id=gym_id,
        member_id=member_id,
        membership_id=membership_id,
        status=status,
        payment_type=payment_type,
        payment_method=payment_method,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.post("/payments", response_model=PaymentOut, status_code=201)
def create_payment(body: PaymentCreate, request: Request, db: Session = Depends(get_db)):
    """
    Record a payment.

    Flow (single transaction):
    1. Membership fee settles the member's next open installment
    2. Payment row inserted with receipt number
    3. Membership paid / pending amounts recomputed
    """
    request.state.step = "create_payment"
    with transaction(db):
        payment = PaymentService(db).create_payment(body.model_dump(exclude_none=True))
    return payment


@router.get("/payments/stats", response_model=Dict[str, int])
def payment_stats(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return PaymentService(db).get_payment_stats(gym_id)


@router.post("/payments/recalculate", response_model=Dict[str, Any])
def recalculate_membership_amounts(
    request: Request,
    gym_id: uuid.UUID = Query(...),
    db: Session = Depends(get_db),
):
    """Rebuild paid / pending amounts of every collecting membership from its payments"""
    with transaction(db):
        count = PaymentService(db).recalculate_all_membership_amounts(gym_id)
    return {"memberships_updated": count, "request_id": get_request_id(request)}


@router.patch("/payments/{payment_id}", response_model=PaymentOut)
def update_payment(payment_id: uuid.UUID, body: PaymentUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        payment = PaymentService(db).update_payment(payment_id, body.model_dump(exclude_unset=True))
    return payment
