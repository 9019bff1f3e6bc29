"""
Shared logic for the lists embedded in an event (guests, expenses,
vendors).

Subclasses name the collection, its stored model and its create/update
schemas.  Items are addressed by their stable ``id``; the positional
variants exist for clients that still address rows by index and follow
the pinning rules of ``services.mutations``.
"""

import logging
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel

from ..core.errors import NotFoundError
from ..schemas.common import now_utc, parse_payload
from .event_service import EventService
from .mutations import (
    AddItem,
    DeleteItem,
    DeleteItemAt,
    MutationPolicy,
    MutationResult,
    UpdateItem,
    UpdateItemAt,
    changes_from,
)

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Dict[str, Any]]


class CollectionService:
    collection: str = ""
    item_model: Type[BaseModel]
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]

    @classmethod
    def _parse(cls, model: Type[BaseModel], payload: Payload) -> BaseModel:
        if isinstance(payload, model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        return parse_payload(model, payload)

    @classmethod
    async def list_items(cls, event_id: str, current_user: dict) -> List[BaseModel]:
        event = await EventService.get_event(event_id, current_user, f"{cls.collection}.read")
        return list(getattr(event, cls.collection))

    @classmethod
    async def get_item(cls, event_id: str, item_id: str, current_user: dict) -> BaseModel:
        for item in await cls.list_items(event_id, current_user):
            if item.id == item_id:
                return item
        raise NotFoundError(f"{cls.collection[:-1].capitalize()} not found")

    @classmethod
    async def add_item(cls, event_id: str, data: Payload, current_user: dict) -> MutationResult:
        data = cls._parse(cls.create_model, data)
        now = now_utc()
        item = cls.item_model(
            **data.model_dump(),
            created_by=current_user["user_id"],
            created_at=now,
            updated_at=now,
        )
        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], AddItem(cls.collection, item)
        )
        logger.info("Added %s %s to event %s", cls.collection[:-1], item.id, event_id)
        return result

    @classmethod
    async def update_item(cls, event_id: str, item_id: str, updates: Payload, current_user: dict) -> MutationResult:
        changes = changes_from(cls._parse(cls.update_model, updates))
        return MutationPolicy().run_for_member(
            event_id, current_user["user_id"], UpdateItem(cls.collection, item_id, changes)
        )

    @classmethod
    async def delete_item(cls, event_id: str, item_id: str, current_user: dict) -> MutationResult:
        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], DeleteItem(cls.collection, item_id)
        )
        logger.info("Deleted %s %s from event %s", cls.collection[:-1], item_id, event_id)
        return result

    @classmethod
    async def update_item_at(
        cls,
        event_id: str,
        index: int,
        updates: Payload,
        current_user: dict,
        expected_version: Optional[int] = None,
    ) -> MutationResult:
        changes = changes_from(cls._parse(cls.update_model, updates))
        return MutationPolicy().run_for_member(
            event_id,
            current_user["user_id"],
            UpdateItemAt(cls.collection, index, changes, expected_version),
        )

    @classmethod
    async def delete_item_at(
        cls,
        event_id: str,
        index: int,
        current_user: dict,
        expected_version: Optional[int] = None,
    ) -> MutationResult:
        return MutationPolicy().run_for_member(
            event_id,
            current_user["user_id"],
            DeleteItemAt(cls.collection, index, expected_version),
        )
