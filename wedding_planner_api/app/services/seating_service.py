"""
Business logic for the seating layout.
"""

from typing import Any, Dict, Union

from ..schemas.common import now_utc, parse_payload
from ..schemas.event import EventDocument
from ..schemas.seating import Seating, SeatingLayout
from .event_service import EventService
from .mutations import FunctionIntent, MutationPolicy


class SeatingService:
    """Reads and replaces the seating snapshot of an event."""

    @classmethod
    async def get_seating(cls, event_id: str, current_user: dict) -> Seating:
        event = await EventService.get_event(event_id, current_user, "seating.read")
        return event.seating or Seating()

    @classmethod
    async def save_seating(cls, event_id: str, layout: Union[SeatingLayout, Dict[str, Any]], current_user: dict) -> Seating:
        if not isinstance(layout, SeatingLayout):
            layout = parse_payload(SeatingLayout, layout)
        seating = Seating(**layout.model_dump(), last_updated=now_utc())

        def _apply(event: EventDocument, actor) -> Seating:
            event.seating = seating
            return seating

        result = MutationPolicy().run_for_member(
            event_id, current_user["user_id"], FunctionIntent("seating.write", _apply)
        )
        return result.value
