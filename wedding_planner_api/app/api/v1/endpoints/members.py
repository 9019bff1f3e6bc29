"""
Member endpoints for API v1.

Listing members is open to every member of the event; permission and
role changes and removals need an owner or admin.
"""

from fastapi import APIRouter, Depends

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.event import PermissionUpdate, RoleUpdate
from wedding_planner_api.app.services.event_service import EventService
from wedding_planner_api.app.services.member_service import MemberService


router = APIRouter()


@router.get("/{event_id}/members", response_model=Envelope, response_model_exclude_none=True)
async def list_members(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    members = await MemberService.list_members(event_id, current_user)
    return envelope("Members retrieved successfully", {"members": members})


@router.get("/{event_id}/members/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_member(event_id: str, user_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    member = await MemberService.get_member(event_id, user_id, current_user)
    return envelope("Member retrieved successfully", {"member": member})


@router.put(
    "/{event_id}/members/{user_id}/permissions",
    response_model=Envelope,
    response_model_exclude_none=True,
)
async def update_permissions(
    event_id: str,
    user_id: str,
    payload: PermissionUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Approve, promote or demote a member.

    Only ``admin``, ``collaborator`` and ``pending_approval`` may be
    assigned; ownership cannot be granted or taken away here.
    """
    event = await MemberService.set_permission(event_id, user_id, payload.permissions, current_user)
    return envelope("Member permissions updated successfully", {"event": EventService.to_response(event)})


@router.put("/{event_id}/members/{user_id}/role", response_model=Envelope, response_model_exclude_none=True)
async def update_role(
    event_id: str,
    user_id: str,
    payload: RoleUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    event = await MemberService.set_role(event_id, user_id, payload.role, current_user)
    return envelope("Member role updated successfully", {"event": EventService.to_response(event)})


@router.delete("/{event_id}/members/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def remove_member(event_id: str, user_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    event = await MemberService.remove_member(event_id, user_id, current_user)
    return envelope("Member removed successfully", {"event": EventService.to_response(event)})


@router.delete("/{event_id}/leave", response_model=Envelope, response_model_exclude_none=True)
async def leave_event(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """Leave an event.  The owner cannot leave; they delete the event instead."""
    await MemberService.leave_event(event_id, current_user)
    return envelope("Successfully left the event")
