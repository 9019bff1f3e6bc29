"""
User endpoints for API v1.

Only a lookup by id is exposed; registration and profile changes live
under ``/auth``.
"""

from fastapi import APIRouter, Depends

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_user(user_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """Return a user's public record (never the password hash)."""
    user = await UserService.get_user(user_id)
    return envelope("User retrieved successfully", {"user": user.model_dump(mode="json")})
