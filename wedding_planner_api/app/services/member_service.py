"""
Business logic for event members.

Permission and role changes, removal and leaving are validated by
``services.membership`` and persisted through ``MutationPolicy``.
"""

import logging
from typing import Any, Dict, List

from ..schemas.event import EventDocument, MemberRole, Membership, Permission
from . import membership
from .event_service import EventService
from .mutations import FunctionIntent, MutationPolicy
from .user_service import UserService

logger = logging.getLogger(__name__)


class MemberService:
    """Service for reading and managing the members of an event."""

    @classmethod
    def _present(cls, members: List[Membership]) -> List[Dict[str, Any]]:
        summaries = UserService.get_summaries(m.user for m in members)
        result = []
        for member in members:
            data = member.model_dump(mode="json")
            summary = summaries.get(member.user)
            data["user"] = summary.model_dump() if summary else {"id": member.user}
            result.append(data)
        return result

    @classmethod
    async def list_members(cls, event_id: str, current_user: dict) -> List[Dict[str, Any]]:
        event = await EventService.get_event(event_id, current_user, "members.read")
        return cls._present(event.members)

    @classmethod
    async def get_member(cls, event_id: str, user_id: str, current_user: dict) -> Dict[str, Any]:
        event = await EventService.get_event(event_id, current_user, "members.read")
        return cls._present([membership.get_target(event, user_id)])[0]

    @classmethod
    async def set_permission(cls, event_id: str, user_id: str, permission: Permission, current_user: dict) -> EventDocument:
        def _apply(event: EventDocument, actor: Membership) -> Membership:
            target = membership.get_target(event, user_id)
            membership.set_permission(actor, target, permission)
            return target

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("members.set_permission", _apply)
        )
        logger.info(
            "User %s set permission of %s on event %s to %s",
            current_user["user_id"], user_id, event_id, permission.value,
        )
        return result.event

    @classmethod
    async def set_role(cls, event_id: str, user_id: str, role: MemberRole, current_user: dict) -> EventDocument:
        def _apply(event: EventDocument, actor: Membership) -> Membership:
            target = membership.get_target(event, user_id)
            membership.set_role(actor, target, role)
            return target

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("members.set_role", _apply)
        )
        return result.event

    @classmethod
    async def remove_member(cls, event_id: str, user_id: str, current_user: dict) -> EventDocument:
        def _apply(event: EventDocument, actor: Membership) -> None:
            membership.remove(event, actor, membership.get_target(event, user_id))

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("members.remove", _apply)
        )
        logger.info("User %s removed %s from event %s", current_user["user_id"], user_id, event_id)
        return result.event

    @classmethod
    async def leave_event(cls, event_id: str, current_user: dict) -> None:
        def _apply(event: EventDocument, actor: Membership) -> None:
            membership.leave(event, actor)

        MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("members.leave", _apply)
        )
        logger.info("User %s left event %s", current_user["user_id"], event_id)
