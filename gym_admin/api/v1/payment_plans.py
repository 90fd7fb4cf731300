"""/v1/payment-plans and /v1/installments - installment schedules and settlement"""

import uuid
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.v1.schemas import InstallmentOut, InstallmentPayment, PaymentPlanCreate, PaymentPlanOut
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import MemberService, PaymentPlanService

router = APIRouter()


@router.post("/payment-plans", response_model=PaymentPlanOut, status_code=201)
def create_payment_plan(body: PaymentPlanCreate, db: Session = Depends(get_db)):
    with transaction(db):
        member = MemberService(db).get_member_by_id(body.member_id)
        plan = PaymentPlanService(db).create_payment_plan(gym_id=member.gym_id, **body.model_dump())
    return plan


@router.get("/payment-plans/{plan_id}", response_model=PaymentPlanOut)
def get_payment_plan(plan_id: uuid.UUID, db: Session = Depends(get_db)):
    return PaymentPlanService(db).get_payment_plan(plan_id)


@router.get("/payment-plans/{plan_id}/installments", response_model=List[InstallmentOut])
def get_plan_installments(plan_id: uuid.UUID, db: Session = Depends(get_db)):
    return PaymentPlanService(db).get_installments(plan_id)


@router.post("/payment-plans/{plan_id}/cancel", response_model=PaymentPlanOut)
def cancel_payment_plan(plan_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        plan = PaymentPlanService(db).cancel_payment_plan(plan_id)
    return plan


@router.post("/installments/mark-overdue", response_model=Dict[str, int])
def mark_overdue(gym_id: Optional[uuid.UUID] = Query(None), db: Session = Depends(get_db)):
    with transaction(db):
        count = PaymentPlanService(db).mark_overdue_installments(gym_id=gym_id)
    return {"marked_overdue": count}


@router.post("/installments/{installment_id}/pay", response_model=InstallmentOut)
def pay_installment(installment_id: uuid.UUID, body: InstallmentPayment, db: Session = Depends(get_db)):
    """
    Settle one installment directly.

    Late fee applies when paid after due date plus the plan's grace period.
    Paid or cancelled installments are rejected with 409.
    """
    with transaction(db):
        installment = PaymentPlanService(db).pay_installment(installment_id, **body.model_dump())
    return installment
