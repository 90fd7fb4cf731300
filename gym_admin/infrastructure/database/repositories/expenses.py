"""Data access for expenses"""

import uuid
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import Expense
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository):
    model = Expense

    def _in_range(self, query, gym_id: uuid.UUID, date_from: Optional[date], date_to: Optional[date]):
        query = query.filter(Expense.gym_id == gym_id)
        if date_from:
            query = query.filter(Expense.expense_date >= date_from)
        if date_to:
            query = query.filter(Expense.expense_date <= date_to)
        return query

    def list_expenses(
        self,
        gym_id: uuid.UUID,
        category: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None,
    ) -> List[Expense]:
        query = self._in_range(self.db.query(Expense), gym_id, date_from, date_to)

        if category:
            query = query.filter(Expense.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Expense.description.ilike(pattern), Expense.vendor_name.ilike(pattern)))

        return query.order_by(Expense.expense_date.desc(), Expense.created_at.desc()).all()

    def totals_by_category(
        self,
        gym_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, int]:
        query = self.db.query(Expense.category, func.coalesce(func.sum(Expense.amount_cents), 0))
        rows = self._in_range(query, gym_id, date_from, date_to).group_by(Expense.category).all()
        return {category: int(total) for category, total in rows}

    def total(self, gym_id: uuid.UUID, date_from: Optional[date] = None, date_to: Optional[date] = None) -> int:
        query = self.db.query(func.coalesce(func.sum(Expense.amount_cents), 0))
        return int(self._in_range(query, gym_id, date_from, date_to).scalar() or 0)
