"""Dependency injection for FastAPI endpoints"""

from typing import Optional

from fastapi import Header, Request

from gym_admin.domain.models import ActorContext


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_actor(
    x_actor_user_id: Optional[str] = Header(None),
    x_actor_profile_id: Optional[str] = Header(None),
) -> ActorContext:
    """Actor identity as reported by the calling client; not verified here"""
    return ActorContext(user_id=x_actor_user_id, profile_id=x_actor_profile_id)
