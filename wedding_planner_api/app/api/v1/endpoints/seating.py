"""
Seating chart endpoints for API v1.
"""

from fastapi import APIRouter, Depends

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.seating import SeatingUpdate
from wedding_planner_api.app.services.seating_service import SeatingService


router = APIRouter()


@router.get("/{event_id}/seating", response_model=Envelope, response_model_exclude_none=True)
async def get_seating(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """Return the saved layout, or an empty one if nothing was saved yet."""
    seating = await SeatingService.get_seating(event_id, current_user)
    return envelope("Seating retrieved successfully", {"seating": seating.model_dump(mode="json")})


@router.put("/{event_id}/seating", response_model=Envelope, response_model_exclude_none=True)
async def save_seating(
    event_id: str,
    payload: SeatingUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Replace the whole seating layout."""
    seating = await SeatingService.save_seating(event_id, payload.seating_data, current_user)
    return envelope("Seating saved successfully", {"seating": seating.model_dump(mode="json")})
