"""Data access for gyms"""

from typing import List

from gym_admin.infrastructure.database.models import Gym
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class GymRepository(BaseRepository):
    model = Gym

    def list_all(self) -> List[Gym]:
        return self.db.query(Gym).order_by(Gym.created_at).all()
