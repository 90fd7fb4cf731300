"""/v1/memberships - membership lifecycle"""

import uuid
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.v1.schemas import (
    MembershipCancel,
    MembershipChangeRequest,
    MembershipChangeResult,
    MembershipCreate,
    MembershipFreeze,
    MembershipOut,
    MembershipTransfer,
    MembershipUpdate,
    PaymentPlanOut,
    TrialConversion,
)
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import MembershipService

router = APIRouter()


@router.get("/memberships", response_model=List[MembershipOut])
def list_memberships(
    gym_id: Optional[uuid.UUID] = Query(None),
    member_id: Optional[uuid.UUID] = Query(None),
    status: Optional[str] = Query(None),
    package_id: Optional[uuid.UUID] = Query(None),
    is_trial: Optional[bool] = Query(None),
    start_date_from: Optional[date] = Query(None),
    start_date_to: Optional[date] = Query(None),
    end_date_from: Optional[date] = Query(None),
    end_date_to: Optional[date] = Query(None),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return MembershipService(db).get_memberships(
        gym_id=gym_id,
        member_id=member_id,
        status=status,
        package_id=package_id,
        is_trial=is_trial,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        end_date_from=end_date_from,
        end_date_to=end_date_to,
        page=page,
        limit=limit,
    )


@router.post("/memberships", response_model=MembershipOut, status_code=201)
def create_membership(body: MembershipCreate, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).create_membership(body.model_dump(exclude_none=True))
    return membership


@router.get("/memberships/expiring", response_model=List[MembershipOut])
def expiring_memberships(
    gym_id: Optional[uuid.UUID] = Query(None),
    days: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    return MembershipService(db).get_expiring_memberships(days=days, gym_id=gym_id)


@router.get("/memberships/trials", response_model=List[MembershipOut])
def trial_memberships(gym_id: Optional[uuid.UUID] = Query(None), db: Session = Depends(get_db)):
    return MembershipService(db).get_trial_memberships(gym_id)


@router.get("/memberships/stats", response_model=Dict[str, int])
def membership_stats(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return MembershipService(db).get_membership_stats(gym_id)


@router.post("/memberships/expire", response_model=Dict[str, int])
def expire_memberships(gym_id: Optional[uuid.UUID] = Query(None), db: Session = Depends(get_db)):
    """Mark active memberships past their end date as expired"""
    with transaction(db):
        count = MembershipService(db).expire_lapsed_memberships(gym_id=gym_id)
    return {"expired": count}


@router.get("/memberships/{membership_id}", response_model=MembershipOut)
def get_membership(membership_id: uuid.UUID, db: Session = Depends(get_db)):
    return MembershipService(db).get_membership_by_id(membership_id)


@router.patch("/memberships/{membership_id}", response_model=MembershipOut)
def update_membership(membership_id: uuid.UUID, body: MembershipUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).update_membership(membership_id, body.model_dump(exclude_unset=True))
    return membership


@router.post("/memberships/{membership_id}/cancel", response_model=MembershipOut)
def cancel_membership(membership_id: uuid.UUID, body: MembershipCancel, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).cancel_membership(membership_id, **body.model_dump())
    return membership


@router.post("/memberships/{membership_id}/freeze", response_model=MembershipOut)
def freeze_membership(membership_id: uuid.UUID, body: MembershipFreeze, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).freeze_membership(membership_id, **body.model_dump())
    return membership


@router.post("/memberships/{membership_id}/unfreeze", response_model=MembershipOut)
def unfreeze_membership(membership_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).unfreeze_membership(membership_id)
    return membership


@router.post("/memberships/{membership_id}/change", response_model=MembershipChangeResult)
def change_membership(membership_id: uuid.UUID, body: MembershipChangeRequest, db: Session = Depends(get_db)):
    """
    Upgrade or downgrade.

    Returns:
        The closed membership, the new one and the recorded change
    """
    with transaction(db):
        old, new, change = MembershipService(db).change_membership(membership_id, **body.model_dump())
    return {"old_membership": old, "new_membership": new, "change": change}


@router.post("/memberships/{membership_id}/transfer", response_model=MembershipOut)
def transfer_membership(membership_id: uuid.UUID, body: MembershipTransfer, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).transfer_membership(membership_id, **body.model_dump())
    return membership


@router.post("/memberships/{membership_id}/convert-trial", response_model=MembershipOut)
def convert_trial(membership_id: uuid.UUID, body: TrialConversion, db: Session = Depends(get_db)):
    with transaction(db):
        membership = MembershipService(db).convert_trial_membership(membership_id, **body.model_dump())
    return membership


@router.post("/memberships/{membership_id}/payment-plan", response_model=Optional[PaymentPlanOut])
def create_membership_payment_plan(membership_id: uuid.UUID, db: Session = Depends(get_db)):
    """
    Put the outstanding balance on the default installment plan.

    Returns:
        The plan (existing or new), or null when there is nothing to collect
    """
    with transaction(db):
        plan = MembershipService(db).create_payment_plan_for_membership(membership_id)
    return plan
