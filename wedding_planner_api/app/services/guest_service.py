"""
Business logic for the guest list of an event.
"""

from ..schemas.guest import Guest, GuestCreate, GuestUpdate
from .collection_service import CollectionService


class GuestService(CollectionService):
    """Guests: add, update and delete by id or by position."""

    collection = "guests"
    item_model = Guest
    create_model = GuestCreate
    update_model = GuestUpdate
