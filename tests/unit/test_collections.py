"""Tests for the guest, expense, vendor and seating services."""

import pytest

from wedding_planner_api.app.core.errors import (
    ForbiddenError,
    IndexOutOfRangeError,
    NotFoundError,
    ValidationError,
)
from wedding_planner_api.app.schemas.guest import RSVPStatus
from wedding_planner_api.app.schemas.vendor import VendorStatus
from wedding_planner_api.app.services.event_service import EventService
from wedding_planner_api.app.services.expense_service import ExpenseService
from wedding_planner_api.app.services.guest_service import GuestService
from wedding_planner_api.app.services.seating_service import SeatingService
from wedding_planner_api.app.services.vendor_service import VendorService


class TestGuests:
    async def test_add_assigns_id_and_author(self, event, collaborator):
        result = await GuestService.add_item(
            event.id, {"name": "Aunt Mary", "email": "Mary@Example.com"}, collaborator
        )
        guest = result.value
        assert guest.id
        assert guest.created_by == collaborator["user_id"]
        assert guest.email == "mary@example.com"
        assert guest.rsvp == RSVPStatus.PENDING
        assert [g.id for g in result.event.guests] == [guest.id]

    async def test_update_by_id_keeps_other_fields(self, event, owner):
        added = (await GuestService.add_item(event.id, {"name": "Uncle Bob", "dietary": "Vegan"}, owner)).value
        result = await GuestService.update_item(event.id, added.id, {"rsvp": "Attending"}, owner)
        assert result.value.rsvp == RSVPStatus.ATTENDING
        assert result.value.dietary == "Vegan"
        assert result.value.updated_at >= added.updated_at

    async def test_delete_by_id(self, event, owner):
        first = (await GuestService.add_item(event.id, {"name": "One"}, owner)).value
        second = (await GuestService.add_item(event.id, {"name": "Two"}, owner)).value
        result = await GuestService.delete_item(event.id, first.id, owner)
        assert [g.id for g in result.event.guests] == [second.id]

    async def test_unknown_id(self, event, owner):
        with pytest.raises(NotFoundError, match="Guest not found"):
            await GuestService.update_item(event.id, "missing", {"name": "X"}, owner)

    async def test_index_out_of_range(self, event, owner):
        await GuestService.add_item(event.id, {"name": "Only"}, owner)
        with pytest.raises(IndexOutOfRangeError):
            await GuestService.update_item_at(event.id, 1, {"name": "X"}, owner)
        with pytest.raises(IndexOutOfRangeError):
            await GuestService.delete_item_at(event.id, -1, owner)

    async def test_update_by_index(self, event, owner):
        await GuestService.add_item(event.id, {"name": "One"}, owner)
        await GuestService.add_item(event.id, {"name": "Two"}, owner)
        result = await GuestService.update_item_at(event.id, 1, {"relation": "Friend"}, owner)
        assert result.value.name == "Two"
        assert result.event.guests[1].relation == "Friend"

    async def test_invalid_guest(self, event, owner):
        with pytest.raises(ValidationError):
            await GuestService.add_item(event.id, {"name": "", "email": "not-an-email"}, owner)

    async def test_null_name_rejected_by_index(self, event, owner):
        await GuestService.add_item(event.id, {"name": "Only"}, owner)
        with pytest.raises(ValidationError):
            await GuestService.update_item_at(event.id, 0, {"name": None}, owner)

    async def test_pending_member_cannot_touch_guests(self, event, make_user):
        pending = await make_user("Ben Jones", gender="male")
        await EventService.join_by_invite_code(event.invite_code, pending)
        with pytest.raises(ForbiddenError):
            await GuestService.add_item(event.id, {"name": "Crasher"}, pending)
        with pytest.raises(ForbiddenError):
            await GuestService.list_items(event.id, pending)

    async def test_outsider_gets_not_found(self, event, make_user):
        outsider = await make_user("Eve Adams")
        with pytest.raises(NotFoundError):
            await GuestService.add_item(event.id, {"name": "Crasher"}, outsider)


class TestExpenses:
    async def test_add_and_summarise(self, event, owner):
        await EventService.update_settings(event.id, {"budget": 10000}, owner)
        await ExpenseService.add_item(
            event.id, {"category": "Venue", "description": "Hall", "budgeted": 4000, "actual": 3500}, owner
        )
        await ExpenseService.add_item(
            event.id, {"category": "Flowers", "description": "Bouquets", "budgeted": 500}, owner
        )
        summary = await ExpenseService.summary(event.id, owner)
        assert summary == {
            "budget": 10000,
            "total_budgeted": 4500,
            "total_actual": 3500,
            "remaining": 6500,
        }

    async def test_negative_amount_rejected(self, event, owner):
        with pytest.raises(ValidationError):
            await ExpenseService.add_item(
                event.id, {"category": "Venue", "description": "Hall", "budgeted": -5}, owner
            )

    async def test_delete_by_index(self, event, owner):
        first = (await ExpenseService.add_item(
            event.id, {"category": "Venue", "description": "Hall", "budgeted": 1}, owner
        )).value
        result = await ExpenseService.delete_item_at(event.id, 0, owner)
        assert result.value.id == first.id
        assert result.event.expenses == []


class TestVendors:
    async def _add_florist(self, event, user):
        result = await VendorService.add_item(
            event.id,
            {
                "name": "Bloom & Co",
                "category": "Florist",
                "contact": {"name": "Rosa", "email": "rosa@bloom.co", "phone": "555-0101"},
                "pricing": {"quoted": 1200, "deposit": 300},
            },
            user,
        )
        return result.value

    async def test_get_and_list(self, event, collaborator):
        vendor = await self._add_florist(event, collaborator)
        assert (await VendorService.get_item(event.id, vendor.id, collaborator)).name == "Bloom & Co"
        assert [v.id for v in await VendorService.list_items(event.id, collaborator)] == [vendor.id]

    async def test_nested_patch_merges(self, event, owner):
        vendor = await self._add_florist(event, owner)
        result = await VendorService.update_item(
            event.id,
            vendor.id,
            {"status": "booked", "pricing": {"deposit_paid": True}, "contact": {"phone": "555-0202"}},
            owner,
        )
        updated = result.value
        assert updated.status == VendorStatus.BOOKED
        assert updated.pricing.deposit_paid is True
        assert updated.pricing.quoted == 1200
        assert updated.pricing.deposit == 300
        assert updated.contact.phone == "555-0202"
        assert updated.contact.name == "Rosa"
        assert updated.contact.email == "rosa@bloom.co"

    async def test_delete(self, event, owner):
        vendor = await self._add_florist(event, owner)
        await VendorService.delete_item(event.id, vendor.id, owner)
        with pytest.raises(NotFoundError, match="Vendor not found"):
            await VendorService.get_item(event.id, vendor.id, owner)

    async def test_bad_contact_email(self, event, owner):
        vendor = await self._add_florist(event, owner)
        with pytest.raises(ValidationError):
            await VendorService.update_item(event.id, vendor.id, {"contact": {"email": "nope"}}, owner)

    async def test_null_clears_final_price(self, event, owner):
        vendor = await self._add_florist(event, owner)
        await VendorService.update_item(event.id, vendor.id, {"pricing": {"final": 850}}, owner)
        result = await VendorService.update_item(event.id, vendor.id, {"pricing": {"final": None}}, owner)
        assert result.value.pricing.final is None
        assert result.value.pricing.quoted == 1200
        stored = await VendorService.get_item(event.id, vendor.id, owner)
        assert stored.pricing.final is None

    async def test_null_on_required_field_rejected(self, event, owner):
        vendor = await self._add_florist(event, owner)
        with pytest.raises(ValidationError) as exc_info:
            await VendorService.update_item(event.id, vendor.id, {"name": None}, owner)
        assert [err["field"] for err in exc_info.value.errors] == ["name"]
        assert (await VendorService.get_item(event.id, vendor.id, owner)).name == "Bloom & Co"


class TestSeating:
    async def test_default_is_empty(self, event, owner):
        seating = await SeatingService.get_seating(event.id, owner)
        assert seating.table_groups == []
        assert seating.guest_pool == []
        assert seating.total_guests == 0

    async def test_save_replaces_snapshot(self, event, collaborator):
        layout = {
            "total_guests": 2,
            "guest_pool": [{"id": "g2", "name": "Two"}],
            "table_groups": [
                {
                    "id": "grp1",
                    "name": "Family",
                    "color": "#ffcc00",
                    "tables": [
                        {
                            "id": "t1",
                            "label": "Table 1",
                            "capacity": 8,
                            "group_id": "grp1",
                            "guests": [{"id": "g1", "name": "One", "table_id": "t1"}],
                        }
                    ],
                }
            ],
        }
        saved = await SeatingService.save_seating(event.id, layout, collaborator)
        loaded = await SeatingService.get_seating(event.id, collaborator)
        assert loaded == saved
        assert loaded.table_groups[0].tables[0].guests[0].name == "One"

        emptied = await SeatingService.save_seating(event.id, {"total_guests": 0}, collaborator)
        assert emptied.table_groups == []
        assert emptied.last_updated >= saved.last_updated
