"""Data access for payments"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from gym_admin.infrastructure.database.models import Member, Payment, Profile
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class PaymentRepository(BaseRepository):
    model = Payment

    def list_payments(
        self,
        gym_id: Optional[uuid.UUID] = None,
        member_id: Optional[uuid.UUID] = None,
        membership_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        payment_type: Optional[str] = None,
        payment_method: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Payment]:
        query = self.db.query(Payment)

        if gym_id:
            query = query.filter(Payment.gym_id == gym_id)
        if member_id:
            query = query.filter(Payment.member_id == member_id)
        if membership_id:
            query = query.filter(Payment.membership_id == membership_id)
        if status:
            query = query.filter(Payment.status == status)
        if payment_type:
            query = query.filter(Payment.payment_type == payment_type)
        if payment_method:
            query = query.filter(Payment.payment_method == payment_method)
        if date_from:
            query = query.filter(Payment.payment_date >= date_from)
        if date_to:
            query = query.filter(Payment.payment_date <= date_to)

        query = query.order_by(Payment.payment_date.desc(), Payment.created_at.desc())
        return self.paginate(query, page, limit).all()

    def total_paid_for_membership(self, membership_id: uuid.UUID) -> int:
        total = (
            self.db.query(func.coalesce(func.sum(Payment.amount_cents), 0))
            .filter(Payment.membership_id == membership_id, Payment.status == "paid")
            .scalar()
        )
        return int(total or 0)

    def count(self, gym_id: uuid.UUID, status: Optional[str] = None) -> int:
        query = self.db.query(func.count(Payment.id)).filter(Payment.gym_id == gym_id)
        if status:
            query = query.filter(Payment.status == status)
        return query.scalar() or 0

    def total(
        self,
        gym_id: uuid.UUID,
        status: str = "paid",
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> int:
        query = self.db.query(func.coalesce(func.sum(Payment.amount_cents), 0)).filter(
            Payment.gym_id == gym_id, Payment.status == status
        )
        if date_from:
            query = query.filter(Payment.payment_date >= date_from)
        if date_to:
            query = query.filter(Payment.payment_date <= date_to)
        return int(query.scalar() or 0)

    def income_rows(
        self,
        gym_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        payment_type: Optional[str] = None,
        member_id: Optional[uuid.UUID] = None,
    ) -> List[Dict[str, Any]]:
        """Paid payments flattened with the paying member's code and name"""
        query = (
            self.db.query(Payment, Member.member_code, Profile.first_name, Profile.last_name)
            .join(Member, Member.id == Payment.member_id)
            .join(Profile, Profile.id == Member.profile_id)
            .filter(Payment.gym_id == gym_id, Payment.status == "paid")
        )
        if date_from:
            query = query.filter(Payment.payment_date >= date_from)
        if date_to:
            query = query.filter(Payment.payment_date <= date_to)
        if payment_type:
            query = query.filter(Payment.payment_type == payment_type)
        if member_id:
            query = query.filter(Payment.member_id == member_id)

        rows = []
        for payment, member_code, first_name, last_name in query.order_by(Payment.payment_date.desc()).all():
            rows.append(
                {
                    "id": payment.id,
                    "amount_cents": payment.amount_cents,
                    "payment_type": payment.payment_type,
                    "payment_method": payment.payment_method,
                    "payment_date": payment.payment_date,
                    "receipt_number": payment.receipt_number,
                    "member_id": payment.member_id,
                    "member_code": member_code,
                    "member_name": f"{first_name} {last_name or ''}".strip(),
                }
            )
        return rows
