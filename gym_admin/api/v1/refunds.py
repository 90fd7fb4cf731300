"""/v1/refunds - refund requests and processing"""

import uuid
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.dependencies import get_actor
from gym_admin.api.v1.schemas import RefundCreate, RefundOut, RefundProcess, RefundReject, RefundUpdate
from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import RefundService

router = APIRouter()


@router.get("/refunds", response_model=List[RefundOut])
def list_refunds(
    gym_id: Optional[uuid.UUID] = Query(None),
    member_id: Optional[uuid.UUID] = Query(None),
    membership_id: Optional[uuid.UUID] = Query(None),
    status: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return RefundService(db).get_refund_requests(
        gym_id=gym_id,
        member_id=member_id,
        membership_id=membership_id,
        status=status,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.post("/refunds", response_model=RefundOut, status_code=201)
def create_refund(body: RefundCreate, db: Session = Depends(get_db)):
    with transaction(db):
        refund = RefundService(db).create_refund_request(body.model_dump(exclude_none=True))
    return refund


@router.get("/refunds/stats", response_model=Dict[str, int])
def refund_stats(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return RefundService(db).get_refund_stats(gym_id)


@router.patch("/refunds/{refund_id}", response_model=RefundOut)
def update_refund(refund_id: uuid.UUID, body: RefundUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        refund = RefundService(db).update_refund_request(refund_id, body.model_dump(exclude_unset=True))
    return refund


@router.post("/refunds/{refund_id}/process", response_model=RefundOut)
def process_refund(
    refund_id: uuid.UUID,
    body: RefundProcess,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    """
    Approve and pay out a refund.

    Final amount is the approved amount less the processing fee; it is
    added to the membership's refunded total.
    """
    with transaction(db):
        refund = RefundService(db).process_refund_request(refund_id, ctx=actor, **body.model_dump())
    return refund


@router.post("/refunds/{refund_id}/reject", response_model=RefundOut)
def reject_refund(refund_id: uuid.UUID, body: RefundReject, db: Session = Depends(get_db)):
    with transaction(db):
        refund = RefundService(db).reject_refund_request(refund_id, body.admin_comments)
    return refund
