"""/v1/expenses - operating expenses"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette.responses import Response

from gym_admin.api.v1.schemas import ExpenseCreate, ExpenseOut, ExpenseSummary, ExpenseUpdate
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import ExpenseService

router = APIRouter()


@router.get("/expenses", response_model=List[ExpenseOut])
def list_expenses(
    gym_id: uuid.UUID = Query(...),
    category: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return ExpenseService(db).get_expenses(
        gym_id, category=category, date_from=date_from, date_to=date_to, search=search
    )


@router.post("/expenses", response_model=ExpenseOut, status_code=201)
def create_expense(body: ExpenseCreate, db: Session = Depends(get_db)):
    with transaction(db):
        expense = ExpenseService(db).create_expense(body.model_dump(exclude_none=True))
    return expense


@router.get("/expenses/summary", response_model=ExpenseSummary)
def expense_summary(
    gym_id: uuid.UUID = Query(...),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    return {
        "total_cents": service.get_total_expenses(gym_id, date_from, date_to),
        "by_category": service.get_expense_summary(gym_id, date_from, date_to),
    }


@router.patch("/expenses/{expense_id}", response_model=ExpenseOut)
def update_expense(expense_id: uuid.UUID, body: ExpenseUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        expense = ExpenseService(db).update_expense(expense_id, body.model_dump(exclude_unset=True))
    return expense


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(expense_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        ExpenseService(db).delete_expense(expense_id)
    return Response(status_code=204)
