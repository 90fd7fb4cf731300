"""/v1/activity-logs - audit trail lookup"""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gym_admin.api.v1.schemas import ActivityLogOut
from gym_admin.infrastructure.database.session import get_db
from gym_admin.services import ActivityLogService

router = APIRouter()


@router.get("/activity-logs", response_model=List[ActivityLogOut])
def activity_logs(
    gym_id: uuid.UUID = Query(...),
    resource_type: Optional[str] = Query(None),
    resource_id: Optional[str] = Query(None),
    actor_user_id: Optional[str] = Query(None),
    created_from: Optional[datetime] = Query(None),
    created_to: Optional[datetime] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Newest first"""
    return ActivityLogService(db).fetch_logs(
        gym_id,
        resource_type=resource_type,
        resource_id=resource_id,
        actor_user_id=actor_user_id,
        created_from=created_from,
        created_to=created_to,
        limit=limit,
    )
