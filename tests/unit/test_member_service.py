"""Tests for member management persisted through the event store."""

import pytest

from wedding_planner_api.app.core.errors import ForbiddenError, NotFoundError
from wedding_planner_api.app.schemas.event import MemberRole, Permission
from wedding_planner_api.app.services.event_service import EventService
from wedding_planner_api.app.services.member_service import MemberService


class TestMemberService:
    async def test_list_populates_user_summaries(self, event, owner, collaborator):
        members = await MemberService.list_members(event.id, collaborator)
        names = {m["user"]["name"]: m["permissions"] for m in members}
        assert names == {"Anna Smith": "owner", "Tom Brown": "collaborator"}

    async def test_get_member(self, event, owner, collaborator):
        member = await MemberService.get_member(event.id, collaborator["user_id"], owner)
        assert member["user"]["email"] == collaborator["email"]
        with pytest.raises(NotFoundError):
            await MemberService.get_member(event.id, "ghost", owner)

    async def test_set_role(self, event, owner, collaborator):
        updated = await MemberService.set_role(event.id, collaborator["user_id"], MemberRole.FAMILY, owner)
        member = updated.find_member(collaborator["user_id"])
        assert member.role == MemberRole.FAMILY
        assert member.permissions == Permission.COLLABORATOR

    async def test_removed_member_loses_access(self, event, owner, collaborator):
        updated = await MemberService.remove_member(event.id, collaborator["user_id"], owner)
        assert not updated.is_member(collaborator["user_id"])
        with pytest.raises(NotFoundError):
            await EventService.get_event(event.id, collaborator)

    async def test_leave(self, event, collaborator):
        await MemberService.leave_event(event.id, collaborator)
        assert await EventService.list_events_for_user(collaborator) == []

    async def test_owner_cannot_leave(self, event, owner):
        with pytest.raises(ForbiddenError, match="delete the event"):
            await MemberService.leave_event(event.id, owner)

    async def test_admin_approves_but_cannot_touch_admins(self, event, owner, collaborator, make_user):
        await MemberService.set_permission(event.id, collaborator["user_id"], Permission.ADMIN, owner)
        other = await make_user("Cara White")
        await EventService.join_by_invite_code(event.invite_code, other)

        approved = await MemberService.set_permission(event.id, other["user_id"], Permission.COLLABORATOR, collaborator)
        assert approved.find_member(other["user_id"]).permissions == Permission.COLLABORATOR

        await MemberService.set_permission(event.id, other["user_id"], Permission.ADMIN, owner)
        with pytest.raises(ForbiddenError):
            await MemberService.set_permission(event.id, other["user_id"], Permission.COLLABORATOR, collaborator)
        with pytest.raises(ForbiddenError):
            await MemberService.remove_member(event.id, other["user_id"], collaborator)

    async def test_set_permission_to_owner_always_fails(self, event, owner, collaborator):
        for actor in (owner, collaborator):
            with pytest.raises(ForbiddenError):
                await MemberService.set_permission(event.id, collaborator["user_id"], Permission.OWNER, actor)
