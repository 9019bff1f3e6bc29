"""
Event endpoints for API v1.

Create, join, list, read, update and soft-delete events, plus the
event settings.  Every route requires a bearer token; an event the
caller does not belong to is reported as 404.
"""

from fastapi import APIRouter, Depends, status

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.event import EventCreate, EventUpdate, JoinRequest, SettingsUpdate
from wedding_planner_api.app.services.event_service import EventService


router = APIRouter()


@router.post(
    "/create",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    event: EventCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Create an event; the caller becomes its owner."""
    created = await EventService.create_event(event, current_user)
    return envelope("Event created successfully", {"event": EventService.to_response(created)})


@router.post("/join", response_model=Envelope, response_model_exclude_none=True)
async def join_event(
    payload: JoinRequest,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Join an event by invite code.

    New members start as guests pending approval.  Joining an event
    twice is harmless and returns the same event.
    """
    event = await EventService.join_by_invite_code(payload.invite_code, current_user)
    return envelope("Successfully joined the event", {"event": EventService.to_response(event)})


@router.get("/my-events", response_model=Envelope, response_model_exclude_none=True)
async def my_events(current_user: dict = Depends(get_current_user)) -> dict:
    """List active events the caller belongs to, newest first."""
    events = await EventService.list_events_for_user(current_user)
    return envelope(
        "Events retrieved successfully",
        {"events": [EventService.to_response(e) for e in events]},
    )


@router.get("/{event_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_event(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    event = await EventService.get_event(event_id, current_user)
    return envelope("Event retrieved successfully", {"event": EventService.to_response(event)})


@router.get("/{event_id}/record", response_model=Envelope, response_model_exclude_none=True)
async def get_event_record(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """Return the stored event to its creator, including after deletion."""
    event = await EventService.get_event_record(event_id, current_user)
    return envelope("Event record retrieved successfully", {"event": EventService.to_response(event)})


@router.put("/{event_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Update event details (owner only)."""
    event = await EventService.update_event(event_id, updates, current_user)
    return envelope("Event updated successfully", {"event": EventService.to_response(event)})


@router.delete("/{event_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_event(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """Soft-delete an event (owner only)."""
    await EventService.soft_delete(event_id, current_user)
    return envelope("Event deleted successfully")


@router.get("/{event_id}/settings", response_model=Envelope, response_model_exclude_none=True)
async def get_settings(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    data = await EventService.get_settings(event_id, current_user)
    return envelope("Settings retrieved successfully", data)


@router.put("/{event_id}/settings", response_model=Envelope, response_model_exclude_none=True)
async def update_settings(
    event_id: str,
    updates: SettingsUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Merge settings keys (owner only); unknown keys are ignored."""
    event = await EventService.update_settings(event_id, updates, current_user)
    return envelope(
        "Settings updated successfully",
        {"settings": event.settings.model_dump(mode="json")},
    )
