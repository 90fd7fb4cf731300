"""Database session management with connection pooling"""

from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from gym_admin.config import settings

# Connection pool: max 20 connections, recycle after 1 hour to avoid stale connections
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=10,
    max_overflow=10,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


AFTER_COMMIT_KEY = "after_commit"


def after_commit(db: Session, callback: Callable[[], None]) -> None:
    """Run callback once the enclosing transaction() has committed; dropped on rollback"""
    db.info.setdefault(AFTER_COMMIT_KEY, []).append(callback)


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """One unit of work: commit when the block finishes, roll back if it raises"""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        db.info.pop(AFTER_COMMIT_KEY, None)
        raise

    for callback in db.info.pop(AFTER_COMMIT_KEY, []):
        callback()
