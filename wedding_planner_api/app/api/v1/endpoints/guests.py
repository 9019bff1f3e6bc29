"""
Guest list endpoints for API v1.

Guests are addressed by their ``id``.  The ``/guests/index/{index}``
routes remain for older clients that address rows by position; they
accept an optional ``expected_version`` query parameter and answer 409
when the list moved underneath them.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.guest import GuestCreate, GuestUpdate
from wedding_planner_api.app.services.guest_service import GuestService
from wedding_planner_api.app.services.mutations import MutationResult


router = APIRouter()


def _result(message: str, result: MutationResult, with_item: bool = True) -> dict:
    data = {
        "guests": [g.model_dump(mode="json") for g in result.event.guests],
        "version": result.event.version,
    }
    if with_item:
        data["guest"] = result.value.model_dump(mode="json")
    return envelope(message, data)


@router.get("/{event_id}/guests", response_model=Envelope, response_model_exclude_none=True)
async def list_guests(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    guests = await GuestService.list_items(event_id, current_user)
    return envelope(
        "Guests retrieved successfully",
        {"guests": [g.model_dump(mode="json") for g in guests]},
    )


@router.post(
    "/{event_id}/guests",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_guest(
    event_id: str,
    guest: GuestCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await GuestService.add_item(event_id, guest, current_user)
    return _result("Guest added successfully", result)


@router.put("/{event_id}/guests/index/{index}", response_model=Envelope, response_model_exclude_none=True)
async def update_guest_at(
    event_id: str,
    index: int,
    updates: GuestUpdate,
    expected_version: Optional[int] = Query(None),
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await GuestService.update_item_at(event_id, index, updates, current_user, expected_version)
    return _result("Guest updated successfully", result)


@router.delete("/{event_id}/guests/index/{index}", response_model=Envelope, response_model_exclude_none=True)
async def delete_guest_at(
    event_id: str,
    index: int,
    expected_version: Optional[int] = Query(None),
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await GuestService.delete_item_at(event_id, index, current_user, expected_version)
    return _result("Guest deleted successfully", result, with_item=False)


@router.put("/{event_id}/guests/{guest_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_guest(
    event_id: str,
    guest_id: str,
    updates: GuestUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await GuestService.update_item(event_id, guest_id, updates, current_user)
    return _result("Guest updated successfully", result)


@router.delete("/{event_id}/guests/{guest_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_guest(event_id: str, guest_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    result = await GuestService.delete_item(event_id, guest_id, current_user)
    return _result("Guest deleted successfully", result, with_item=False)
