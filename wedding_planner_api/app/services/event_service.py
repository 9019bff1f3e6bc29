"""
Business logic for events.

Creating, joining, reading, updating and soft-deleting events.  Reads
are scoped to the caller's membership: an event the caller does not
belong to, or one that has been soft-deleted, is reported as not
found.  Writes go through ``MutationPolicy`` so that a concurrent
change to the same document is retried instead of overwritten.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Union

from ..core.errors import CodeSpaceExhaustedError, NotFoundError
from ..schemas.common import parse_payload
from ..schemas.event import EventCreate, EventDocument, EventSettings, EventUpdate, SettingsUpdate
from . import membership
from .access import require
from .event_store import EventStore
from .invite_code import InviteCodeGenerator, normalize_invite_code
from .mutations import FunctionIntent, Intent, MutationPolicy, changes_from, merge_item
from .user_service import UserService

logger = logging.getLogger(__name__)


class JoinEvent(Intent):
    """Add the caller as a pending member; a no-op if already a member."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id

    def apply(self, event, actor):
        self.changed = membership.join(event, self.user_id)
        return event


class EventService:
    """Service for managing events and their settings."""

    @classmethod
    async def create_event(cls, data: Union[EventCreate, Dict[str, Any]], current_user: dict) -> EventDocument:
        """Create an event with the caller as its sole owner.

        A fresh invite code is drawn before the first insert.  If the
        unique index still rejects the code (a concurrent creator won the
        same draw), another code is drawn within the same attempt budget.
        """
        if not isinstance(data, EventCreate):
            data = parse_payload(EventCreate, data)
        user_id = current_user["user_id"]
        logger.info("User %s is creating event '%s'", user_id, data.name)
        generator = InviteCodeGenerator(EventStore.invite_code_exists)
        for _ in range(generator.max_attempts):
            event = EventDocument(
                **data.model_dump(),
                created_by=user_id,
                invite_code=generator.generate(),
                members=[membership.create_owner(user_id, current_user.get("gender"))],
            )
            try:
                return EventStore.insert(event)
            except sqlite3.IntegrityError as exc:
                if "invite_code" not in str(exc):
                    raise
                logger.warning("Invite code %s was taken concurrently, drawing again", event.invite_code)
        raise CodeSpaceExhaustedError()

    @classmethod
    async def join_by_invite_code(cls, code: str, current_user: dict) -> EventDocument:
        """Join the active event carrying ``code`` (case-insensitive).

        Joining an event one already belongs to returns it unchanged.
        """
        code = normalize_invite_code(code)
        user_id = current_user["user_id"]
        result = MutationPolicy().run(
            JoinEvent(user_id),
            lambda: EventStore.find_active_by_invite_code(code),
            user_id,
            not_found="Invalid invite code or event not found",
        )
        if result.changed:
            logger.info("User %s joined event %s", user_id, result.event.id)
        return result.event

    @classmethod
    async def list_events_for_user(cls, current_user: dict) -> List[EventDocument]:
        return EventStore.list_for_user(current_user["user_id"])

    @classmethod
    async def get_event(cls, event_id: str, current_user: dict, operation: str = "event.read") -> EventDocument:
        """Load an active event the caller belongs to and check ``operation``."""
        event = EventStore.find_for_member(event_id, current_user["user_id"])
        require(event.find_member(current_user["user_id"]) if event else None, operation)
        return event

    @classmethod
    async def get_event_record(cls, event_id: str, current_user: dict) -> EventDocument:
        """Return an event to its creator even after it was soft-deleted."""
        event = EventStore.load(event_id)
        if event is None or event.created_by != current_user["user_id"]:
            raise NotFoundError("Event not found or you don't have access")
        return event

    @classmethod
    async def update_event(cls, event_id: str, updates: Union[EventUpdate, Dict[str, Any]], current_user: dict) -> EventDocument:
        """Patch top-level fields (owner only).

        ``budget`` is written to ``settings.budget``; ``event_date``
        arrives parsed by the schema.  ``null`` clears ``description`` or
        ``location`` and is rejected for the other fields.
        """
        if not isinstance(updates, EventUpdate):
            updates = parse_payload(EventUpdate, updates)
        changes = changes_from(updates)
        fields = {key: value for key, value in changes.items() if key != "budget"}
        if "budget" in changes:
            fields["settings"] = {"budget": changes["budget"]}

        def _apply(event: EventDocument, actor) -> EventDocument:
            merged = merge_item(event, fields)
            for key in (*fields, "updated_at"):
                setattr(event, key, getattr(merged, key))
            return event

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("event.update", _apply)
        )
        logger.info("Event %s updated by %s: %s", event_id, current_user["user_id"], sorted(changes))
        return result.event

    @classmethod
    async def get_settings(cls, event_id: str, current_user: dict) -> Dict[str, Any]:
        event = await cls.get_event(event_id, current_user, "settings.read")
        return {"settings": event.settings.model_dump(mode="json"), "event_name": event.name}

    @classmethod
    async def update_settings(cls, event_id: str, updates: Union[SettingsUpdate, Dict[str, Any]], current_user: dict) -> EventDocument:
        """Merge the provided settings keys (owner only); unknown keys are ignored."""
        if not isinstance(updates, SettingsUpdate):
            updates = parse_payload(SettingsUpdate, updates)
        changes = changes_from(updates)

        def _apply(event: EventDocument, actor) -> EventDocument:
            event.settings = parse_payload(EventSettings, {**event.settings.model_dump(), **changes})
            return event

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("settings.update", _apply)
        )
        return result.event

    @classmethod
    async def soft_delete(cls, event_id: str, current_user: dict) -> None:
        """Mark the event inactive (owner only); the document is kept."""

        def _apply(event: EventDocument, actor) -> None:
            event.is_active = False

        MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("event.delete", _apply)
        )
        logger.info("Event %s deleted by %s", event_id, current_user["user_id"])

    @classmethod
    def to_response(cls, event: EventDocument) -> Dict[str, Any]:
        """Serialise an event with creator and members populated."""
        data = event.model_dump(mode="json")
        summaries = UserService.get_summaries([event.created_by] + [m.user for m in event.members])

        def _summary(user_id: str) -> Dict[str, Any]:
            summary = summaries.get(user_id)
            return summary.model_dump() if summary else {"id": user_id}

        data["created_by"] = _summary(event.created_by)
        for member in data["members"]:
            member["user"] = _summary(member["user"])
        return data
