"""Data access for refund requests"""

import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import func

from gym_admin.infrastructure.database.models import RefundRequest
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class RefundRequestRepository(BaseRepository):
    model = RefundRequest

    def list_requests(
        self,
        gym_id: Optional[uuid.UUID] = None,
        member_id: Optional[uuid.UUID] = None,
        membership_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[RefundRequest]:
        query = self.db.query(RefundRequest)

        if gym_id:
            query = query.filter(RefundRequest.gym_id == gym_id)
        if member_id:
            query = query.filter(RefundRequest.member_id == member_id)
        if membership_id:
            query = query.filter(RefundRequest.membership_id == membership_id)
        if status:
            query = query.filter(RefundRequest.status == status)
        if date_from:
            query = query.filter(RefundRequest.request_date >= date_from)
        if date_to:
            query = query.filter(RefundRequest.request_date <= date_to)

        query = query.order_by(RefundRequest.request_date.desc(), RefundRequest.created_at.desc())
        return self.paginate(query, page, limit).all()

    def count(self, gym_id: uuid.UUID, status: Optional[str] = None) -> int:
        query = self.db.query(func.count(RefundRequest.id)).filter(RefundRequest.gym_id == gym_id)
        if status:
            query = query.filter(RefundRequest.status == status)
        return query.scalar() or 0

    def total_refunded(self, gym_id: uuid.UUID, since: Optional[date] = None) -> int:
        query = self.db.query(func.coalesce(func.sum(RefundRequest.final_refund_amount_cents), 0)).filter(
            RefundRequest.gym_id == gym_id, RefundRequest.status == "processed"
        )
        if since:
            query = query.filter(RefundRequest.processed_date >= since)
        return int(query.scalar() or 0)
