"""
Optimistic concurrency for event mutations.

Guests, expenses and vendors live inside the event document, so two
requests appending to the same list at the same time would overwrite
each other with a naive read-modify-write.  Instead every change is
described as an *intent* (``AddItem``, ``UpdateItem``, ...) that can be
replayed.  ``MutationPolicy.run`` loads the document, checks access,
applies the intent and saves with a version check.  If another writer
got there first, the document is reloaded and the same intent is
applied again, up to ``max_attempts`` times.

Index-addressed intents pin the index to the row's id on the first
attempt.  A retry looks the row up by that id and fails with
``StaleIndexError`` if it is gone rather than editing whatever row now
sits at the old position.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from ..core.config import settings
from ..core.errors import (
    ConcurrencyError,
    IndexOutOfRangeError,
    NotFoundError,
    StaleIndexError,
    VersionConflictError,
)
from ..schemas.common import now_utc, parse_payload
from ..schemas.event import EventDocument, Membership
from . import membership as membership_rules
from .access import require
from .event_store import EventStore

logger = logging.getLogger(__name__)

MAX_ATTEMPTS_CAP = 5

ITEM_LABELS = {"guests": "guest", "expenses": "expense", "vendors": "vendor"}


def changes_from(patch: BaseModel) -> Dict[str, Any]:
    """Fields explicitly sent in ``patch``, nested groups included.

    An explicit ``null`` is kept: it clears a nullable field, and
    ``merge_item`` rejects it for a required one.
    """
    return patch.model_dump(exclude_unset=True)


def merge_item(item: BaseModel, changes: Dict[str, Any]) -> BaseModel:
    """Return a validated copy of ``item`` with ``changes`` applied.

    Nested dicts are merged key by key so that a partial ``contact`` or
    ``pricing`` leaves the other sub-fields untouched.  The result is
    validated against the stored model, so ``null`` on a required field
    raises ``ValidationError``.
    """
    data = item.model_dump()
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(data.get(key), dict):
            data[key] = {**data[key], **value}
        else:
            data[key] = value
    data["updated_at"] = now_utc()
    return parse_payload(type(item), data)


class Intent:
    """A replayable change to an event document.

    ``operation`` names the entry in ``access.OPERATION_LEVELS`` that the
    acting member must satisfy; ``None`` skips the check (joining).
    ``apply`` mutates the document in place and returns the value handed
    back to the caller.  Setting ``changed`` to ``False`` skips the write.
    """

    operation: Optional[str] = None
    changed: bool = True

    def apply(self, event: EventDocument, actor: Optional[Membership]) -> Any:
        raise NotImplementedError


class ItemIntent(Intent):
    def __init__(self, collection: str) -> None:
        if collection not in ITEM_LABELS:
            raise ValueError(f"Unknown collection {collection}")
        self.collection = collection
        self.operation = f"{collection}.write"

    @property
    def label(self) -> str:
        return ITEM_LABELS[self.collection]

    def items(self, event: EventDocument) -> list:
        return getattr(event, self.collection)

    def position_of(self, event: EventDocument, item_id: str) -> int:
        for position, item in enumerate(self.items(event)):
            if item.id == item_id:
                return position
        raise NotFoundError(f"{self.label.capitalize()} not found")


class AddItem(ItemIntent):
    def __init__(self, collection: str, item: BaseModel) -> None:
        super().__init__(collection)
        self.item = item

    def apply(self, event, actor):
        self.items(event).append(self.item)
        return self.item


class UpdateItem(ItemIntent):
    def __init__(self, collection: str, item_id: str, changes: Dict[str, Any]) -> None:
        super().__init__(collection)
        self.item_id = item_id
        self.changes = changes

    def apply(self, event, actor):
        position = self.position_of(event, self.item_id)
        items = self.items(event)
        items[position] = merge_item(items[position], self.changes)
        return items[position]


class DeleteItem(ItemIntent):
    def __init__(self, collection: str, item_id: str) -> None:
        super().__init__(collection)
        self.item_id = item_id

    def apply(self, event, actor):
        position = self.position_of(event, self.item_id)
        return self.items(event).pop(position)


class PositionalIntent(ItemIntent):
    """Base for intents addressed by list position."""

    def __init__(self, collection: str, index: int, expected_version: Optional[int] = None) -> None:
        super().__init__(collection)
        self.index = index
        self.expected_version = expected_version
        self.pinned_id: Optional[str] = None

    def target_position(self, event: EventDocument) -> int:
        items = self.items(event)
        if self.pinned_id is None:
            if self.expected_version is not None and event.version != self.expected_version:
                raise StaleIndexError()
            if not 0 <= self.index < len(items):
                raise IndexOutOfRangeError(f"Invalid {self.label} index")
            self.pinned_id = items[self.index].id
            return self.index
        for position, item in enumerate(items):
            if item.id == self.pinned_id:
                return position
        raise StaleIndexError()


class UpdateItemAt(PositionalIntent):
    def __init__(self, collection: str, index: int, changes: Dict[str, Any], expected_version: Optional[int] = None) -> None:
        super().__init__(collection, index, expected_version)
        self.changes = changes

    def apply(self, event, actor):
        position = self.target_position(event)
        items = self.items(event)
        items[position] = merge_item(items[position], self.changes)
        return items[position]


class DeleteItemAt(PositionalIntent):
    def apply(self, event, actor):
        return self.items(event).pop(self.target_position(event))


class FunctionIntent(Intent):
    """Wraps a plain function for one-off mutations (settings, members, ...)."""

    def __init__(self, operation: Optional[str], func: Callable[[EventDocument, Optional[Membership]], Any]) -> None:
        self.operation = operation
        self.func = func

    def apply(self, event, actor):
        return self.func(event, actor)


@dataclass
class MutationResult:
    event: EventDocument
    value: Any = None
    attempts: int = 1
    changed: bool = field(default=True)


class MutationPolicy:
    """Load, authorize, apply and save with retry on version conflicts.

    ``max_attempts`` defaults to ``settings.mutation_max_attempts`` and
    is clamped to 1..5.
    """

    def __init__(self, max_attempts: Optional[int] = None) -> None:
        attempts = max_attempts if max_attempts is not None else settings.mutation_max_attempts
        self.max_attempts = min(max(1, attempts), MAX_ATTEMPTS_CAP)

    def run(
        self,
        intent: Intent,
        load: Callable[[], Optional[EventDocument]],
        user_id: str,
        not_found: str = "Event not found or you don't have access",
    ) -> MutationResult:
        attempt = 0
        while True:
            attempt += 1
            event = load()
            if event is None:
                raise NotFoundError(not_found)
            actor = event.find_member(user_id)
            if intent.operation is not None:
                require(actor, intent.operation)
            intent.changed = True
            value = intent.apply(event, actor)
            if not intent.changed:
                return MutationResult(event, value, attempt, changed=False)
            if event.is_active:
                membership_rules.assert_single_owner(event)
            try:
                EventStore.save(event)
            except VersionConflictError:
                if attempt >= self.max_attempts:
                    logger.warning(
                        "Giving up on event %s after %d conflicting attempts", event.id, attempt
                    )
                    raise ConcurrencyError()
                logger.info("Retrying mutation on event %s (attempt %d)", event.id, attempt + 1)
                continue
            return MutationResult(event, value, attempt)

    def run_for_member(self, event_id: str, user_id: str, intent: Intent) -> MutationResult:
        return self.run(intent, lambda: EventStore.find_for_member(event_id, user_id), user_id)
