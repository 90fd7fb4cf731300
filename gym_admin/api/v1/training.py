"""/v1/pt-sessions - personal training sessions"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette.responses import Response

from gym_admin.api.v1.schemas import PTSessionCancel, PTSessionComplete, PTSessionCreate, PTSessionOut, PTSessionUpdate
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import PTService

router = APIRouter()


@router.post("/pt-sessions", response_model=PTSessionOut, status_code=201)
def create_pt_session(body: PTSessionCreate, db: Session = Depends(get_db)):
    """Book a session; the trainer's earning is recorded at booking time"""
    with transaction(db):
        session = PTService(db).create_pt_session(body.model_dump(exclude_none=True))
    return session


@router.patch("/pt-sessions/{session_id}", response_model=PTSessionOut)
def update_pt_session(session_id: uuid.UUID, body: PTSessionUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        session = PTService(db).update_pt_session(session_id, body.model_dump(exclude_unset=True))
    return session


@router.delete("/pt-sessions/{session_id}", status_code=204)
def delete_pt_session(session_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        PTService(db).delete_pt_session(session_id)
    return Response(status_code=204)


@router.post("/pt-sessions/{session_id}/complete", response_model=PTSessionOut)
def complete_pt_session(session_id: uuid.UUID, body: PTSessionComplete, db: Session = Depends(get_db)):
    with transaction(db):
        session = PTService(db).complete_session(session_id, **body.model_dump())
    return session


@router.post("/pt-sessions/{session_id}/cancel", response_model=PTSessionOut)
def cancel_pt_session(session_id: uuid.UUID, body: PTSessionCancel, db: Session = Depends(get_db)):
    with transaction(db):
        session = PTService(db).cancel_session(session_id, **body.model_dump())
    return session
