"""/v1/members - member onboarding, profile, trainer assignment and per-member views"""

import uuid
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette.responses import Response

from gym_admin.api.dependencies import get_actor
from gym_admin.api.v1.schemas import (
    InstallmentOut,
    MemberCreate,
    MemberDetailOut,
    MemberOut,
    MemberUpdate,
    MembershipChangeOut,
    PaymentSummaryOut,
    ProfileOut,
    ProfileUpdate,
    PTSessionOut,
    QRPayload,
    TrainerAssignment,
)
from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import MemberService, MembershipService, PaymentPlanService, PTService

router = APIRouter()


@router.get("/members", response_model=List[MemberOut])
def list_members(
    gym_id: Optional[uuid.UUID] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches member code, first or last name"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return MemberService(db).get_members(gym_id=gym_id, status=status, search=search, page=page, limit=limit)


@router.post("/members", response_model=MemberDetailOut, status_code=201)
def create_member(
    body: MemberCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    """Create profile and member together; member code is generated when omitted"""
    with transaction(db):
        member = MemberService(db).create_member(body.model_dump(exclude_none=True), actor)
    return member


@router.get("/members/stats", response_model=Dict[str, int])
def member_stats(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return MemberService(db).get_member_stats(gym_id)


@router.get("/members/{member_id}", response_model=MemberDetailOut)
def get_member(member_id: uuid.UUID, db: Session = Depends(get_db)):
    return MemberService(db).get_member_by_id(member_id)


@router.patch("/members/{member_id}", response_model=MemberDetailOut)
def update_member(
    member_id: uuid.UUID,
    body: MemberUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        member = MemberService(db).update_member(member_id, body.model_dump(exclude_unset=True), actor)
    return member


@router.delete("/members/{member_id}", status_code=204)
def delete_member(
    member_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        MemberService(db).delete_member(member_id, actor)
    return Response(status_code=204)


@router.patch("/profiles/{profile_id}", response_model=ProfileOut)
def update_profile(
    profile_id: uuid.UUID,
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        profile = MemberService(db).update_profile(profile_id, body.model_dump(exclude_unset=True), actor)
    return profile


@router.post("/members/{member_id}/trainer", response_model=MemberDetailOut)
def assign_trainer(
    member_id: uuid.UUID,
    body: TrainerAssignment,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        member = MemberService(db).assign_trainer(member_id, body.trainer_id, actor)
    return member


@router.delete("/members/{member_id}/trainer", response_model=MemberDetailOut)
def unassign_trainer(
    member_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    with transaction(db):
        member = MemberService(db).unassign_trainer(member_id, actor)
    return member


@router.get("/members/{member_id}/qr", response_model=QRPayload)
def member_qr(member_id: uuid.UUID, db: Session = Depends(get_db)):
    """QR payload data for the member card; rendering is up to the client"""
    return MemberService(db).generate_member_qr_data(member_id)


@router.get("/members/{member_id}/installments", response_model=List[InstallmentOut])
def member_installments(member_id: uuid.UUID, db: Session = Depends(get_db)):
    MemberService(db).get_member_by_id(member_id)
    return PaymentPlanService(db).get_member_installments(member_id)


@router.get("/members/{member_id}/payment-summary", response_model=PaymentSummaryOut)
def member_payment_summary(member_id: uuid.UUID, db: Session = Depends(get_db)):
    MemberService(db).get_member_by_id(member_id)
    return PaymentPlanService(db).get_member_payment_summary(member_id)


@router.get("/members/{member_id}/membership-changes", response_model=List[MembershipChangeOut])
def member_membership_changes(member_id: uuid.UUID, db: Session = Depends(get_db)):
    MemberService(db).get_member_by_id(member_id)
    return MembershipService(db).get_membership_changes(member_id)


@router.get("/members/{member_id}/pt-sessions", response_model=List[PTSessionOut])
def member_pt_sessions(member_id: uuid.UUID, db: Session = Depends(get_db)):
    MemberService(db).get_member_by_id(member_id)
    return PTService(db).get_pt_sessions(member_id)
