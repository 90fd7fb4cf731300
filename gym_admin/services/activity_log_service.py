"""Audit trail of back-office changes"""

import logging
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gym_admin.domain.models import ActorContext
from gym_admin.infrastructure.database.models import ActivityLog
from gym_admin.infrastructure.database.repositories import ActivityLogRepository

logger = logging.getLogger(__name__)


def snapshot(record: Any) -> Optional[Dict[str, Any]]:
    """JSON-safe copy of a row's column values"""
    if record is None:
        return None
    data = {}
    for column in record.__table__.columns:
        value = getattr(record, column.key)
        if isinstance(value, (uuid.UUID, date, datetime)):
            value = str(value)
        data[column.key] = value
    return data


class ActivityLogService:
    def __init__(self, db: Session):
        self.db = db
        self.logs = ActivityLogRepository(db)

    def create_log(
        self,
        gym_id: uuid.UUID,
        resource_type: str,
        resource_id: Any,
        action: str,
        ctx: Optional[ActorContext] = None,
        description: Optional[str] = None,
        before_data: Optional[Dict[str, Any]] = None,
        after_data: Optional[Dict[str, Any]] = None,
    ) -> Optional[ActivityLog]:
        """
        Write one audit row inside a savepoint.

        A failed audit write is rolled back to the savepoint and logged; the
        change being audited still goes through.
        """
        ctx = ctx or ActorContext()
        try:
            with self.db.begin_nested():
                return self.logs.add(
                    gym_id=gym_id,
                    actor_user_id=ctx.user_id,
                    actor_profile_id=ctx.profile_id,
                    resource_type=resource_type,
                    resource_id=str(resource_id),
                    action=action,
                    description=description,
                    before_data=before_data,
                    after_data=after_data,
                )
        except SQLAlchemyError as e:
            logger.warning(
                f"Activity log write failed: {e}",
                extra={"resource_type": resource_type, "resource_id": str(resource_id), "action": action},
            )
            return None

    def fetch_logs(
        self,
        gym_id: uuid.UUID,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        actor_user_id: Optional[str] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        limit: int = 50,
    ) -> List[ActivityLog]:
        return self.logs.list_logs(
            gym_id,
            resource_type=resource_type,
            resource_id=resource_id,
            actor_user_id=actor_user_id,
            created_from=created_from,
            created_to=created_to,
            limit=limit,
        )
