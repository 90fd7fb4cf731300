"""Data access for the audit trail"""

import uuid
from datetime import datetime
from typing import List, Optional

from gym_admin.infrastructure.database.models import ActivityLog
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository):
    model = ActivityLog

    def list_logs(
        self,
        gym_id: uuid.UUID,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        actor_user_id: Optional[str] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        limit: int = 50,
    ) -> List[ActivityLog]:
        query = self.db.query(ActivityLog).filter(ActivityLog.gym_id == gym_id)

        if resource_type:
            query = query.filter(ActivityLog.resource_type == resource_type)
        if resource_id:
            query = query.filter(ActivityLog.resource_id == resource_id)
        if actor_user_id:
            query = query.filter(ActivityLog.actor_user_id == actor_user_id)
        if created_from:
            query = query.filter(ActivityLog.created_at >= created_from)
        if created_to:
            query = query.filter(ActivityLog.created_at <= created_to)

        return query.order_by(ActivityLog.created_at.desc()).limit(limit).all()
