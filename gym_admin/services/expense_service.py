"""Operating expenses"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from gym_admin.domain.exceptions import NotFoundError
from gym_admin.infrastructure.database.models import Expense
from gym_admin.infrastructure.database.repositories import ExpenseRepository, GymRepository


class ExpenseService:
    def __init__(self, db: Session):
        self.db = db
        self.expenses = ExpenseRepository(db)
        self.gyms = GymRepository(db)

    def get_expenses(self, gym_id: uuid.UUID, **filters) -> List[Expense]:
        return self.expenses.list_expenses(gym_id, **filters)

    def get_expense(self, expense_id: uuid.UUID) -> Expense:
        expense = self.expenses.get(expense_id)
        if not expense:
            raise NotFoundError("Expense", expense_id)
        return expense

    def create_expense(self, data: Dict[str, Any]) -> Expense:
        if not self.gyms.get(data["gym_id"]):
            raise NotFoundError("Gym", data["gym_id"])
        return self.expenses.add(**data)

    def update_expense(self, expense_id: uuid.UUID, updates: Dict[str, Any]) -> Expense:
        return self.expenses.update(self.get_expense(expense_id), updates)

    def delete_expense(self, expense_id: uuid.UUID) -> None:
        self.expenses.delete(self.get_expense(expense_id))

    def get_expense_summary(
        self,
        gym_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, int]:
        return self.expenses.totals_by_category(gym_id, date_from, date_to)

    def get_total_expenses(
        self,
        gym_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> int:
        return self.expenses.total(gym_id, date_from, date_to)
