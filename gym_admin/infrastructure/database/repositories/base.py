"""Repository base class used by all concrete repositories"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Query, Session


class BaseRepository:
    """
    Query building for one ORM model.

    Repositories only flush; the caller's unit of work decides when to commit.
    """

    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, record_id) -> Optional[Any]:
        return self.db.get(self.model, record_id)

    def add(self, **values) -> Any:
        record = self.model(**values)
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record

    def update(self, record: Any, values: Dict[str, Any]) -> Any:
        for key, value in values.items():
            setattr(record, key, value)
        self.db.flush()
        return record

    def delete(self, record: Any) -> None:
        self.db.delete(record)
        self.db.flush()

    @staticmethod
    def paginate(query: Query, page: Optional[int], limit: Optional[int]) -> Query:
        """Offset pagination, applied only when both page and limit are given"""
        if page and limit:
            query = query.offset((page - 1) * limit).limit(limit)
        return query
