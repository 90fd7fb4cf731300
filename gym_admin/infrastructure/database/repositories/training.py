"""Data access for personal training sessions"""

import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import func

from gym_admin.infrastructure.database.models import TrainingSession
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class TrainingSessionRepository(BaseRepository):
    model = TrainingSession

    def for_member(self, member_id: uuid.UUID) -> List[TrainingSession]:
        return (
            self.db.query(TrainingSession)
            .filter(TrainingSession.member_id == member_id)
            .order_by(TrainingSession.session_date.desc(), TrainingSession.session_number.desc())
            .all()
        )

    def highest_session_number(self, member_id: uuid.UUID) -> int:
        return (
            self.db.query(func.max(TrainingSession.session_number))
            .filter(TrainingSession.member_id == member_id)
            .scalar()
            or 0
        )

    def for_trainer(
        self,
        trainer_id: uuid.UUID,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[TrainingSession]:
        query = self.db.query(TrainingSession).filter(TrainingSession.trainer_id == trainer_id)
        if date_from:
            query = query.filter(TrainingSession.session_date >= date_from)
        if date_to:
            query = query.filter(TrainingSession.session_date <= date_to)
        return query.order_by(TrainingSession.session_date.asc(), TrainingSession.start_time.asc()).all()
