"""Tests for the membership state machine (in-memory documents only)."""

import pytest

from wedding_planner_api.app.core.errors import ForbiddenError, InternalError, NotFoundError
from wedding_planner_api.app.schemas.event import MemberRole, Membership, Permission
from wedding_planner_api.app.services import membership


class TestCreateAndJoin:
    def test_creator_is_owner_with_gendered_role(self):
        assert membership.create_owner("u1", "female").role == MemberRole.BRIDE
        assert membership.create_owner("u1", "male").role == MemberRole.GROOM
        assert membership.create_owner("u1").permissions == Permission.OWNER

    def test_join_adds_pending_guest(self, document):
        assert membership.join(document, "newcomer") is True
        added = document.find_member("newcomer")
        assert added.role == MemberRole.GUEST
        assert added.permissions == Permission.PENDING_APPROVAL

    def test_join_is_idempotent(self, document):
        before = [m.model_dump() for m in document.members]
        assert membership.join(document, "collab") is False
        assert [m.model_dump() for m in document.members] == before

    def test_get_target_unknown(self, document):
        with pytest.raises(NotFoundError, match="Member not found"):
            membership.get_target(document, "ghost")


class TestSetPermission:
    def test_owner_approves_pending(self, document):
        owner, pending = document.find_member("owner"), document.find_member("pending")
        assert membership.set_permission(owner, pending, Permission.COLLABORATOR) is True
        assert pending.permissions == Permission.COLLABORATOR

    def test_same_permission_is_no_change(self, document):
        owner, collab = document.find_member("owner"), document.find_member("collab")
        assert membership.set_permission(owner, collab, Permission.COLLABORATOR) is False

    def test_admin_approves_pending(self, document):
        admin, pending = document.find_member("admin"), document.find_member("pending")
        membership.set_permission(admin, pending, Permission.COLLABORATOR)
        assert pending.permissions == Permission.COLLABORATOR

    def test_admin_cannot_promote_to_admin(self, document):
        admin, collab = document.find_member("admin"), document.find_member("collab")
        with pytest.raises(ForbiddenError, match="promote"):
            membership.set_permission(admin, collab, Permission.ADMIN)

    def test_admin_cannot_demote_other_admin(self, document):
        admin, other = document.find_member("admin"), document.find_member("admin2")
        with pytest.raises(ForbiddenError):
            membership.set_permission(admin, other, Permission.COLLABORATOR)
        assert other.permissions == Permission.ADMIN

    def test_owner_can_demote_admin(self, document):
        owner, admin = document.find_member("owner"), document.find_member("admin")
        membership.set_permission(owner, admin, Permission.COLLABORATOR)
        assert admin.permissions == Permission.COLLABORATOR

    def test_collaborator_cannot_change_anything(self, document):
        collab, pending = document.find_member("collab"), document.find_member("pending")
        with pytest.raises(ForbiddenError):
            membership.set_permission(collab, pending, Permission.COLLABORATOR)

    def test_owner_is_untouchable(self, document):
        owner, admin = document.find_member("owner"), document.find_member("admin")
        with pytest.raises(ForbiddenError):
            membership.set_permission(admin, owner, Permission.COLLABORATOR)
        with pytest.raises(ForbiddenError):
            membership.set_permission(owner, owner, Permission.ADMIN)


class TestSetRole:
    def test_owner_relabels_member(self, document):
        owner, collab = document.find_member("owner"), document.find_member("collab")
        assert membership.set_role(owner, collab, MemberRole.FAMILY) is True
        assert collab.role == MemberRole.FAMILY

    def test_admin_cannot_relabel_owner(self, document):
        admin, owner = document.find_member("admin"), document.find_member("owner")
        with pytest.raises(ForbiddenError):
            membership.set_role(admin, owner, MemberRole.FRIEND)

    def test_admin_may_relabel_self(self, document):
        admin = document.find_member("admin")
        membership.set_role(admin, admin, MemberRole.FRIEND)
        assert admin.role == MemberRole.FRIEND

    def test_role_change_keeps_permissions(self, document):
        owner, pending = document.find_member("owner"), document.find_member("pending")
        membership.set_role(owner, pending, MemberRole.FAMILY)
        assert pending.permissions == Permission.PENDING_APPROVAL


class TestRemoveAndLeave:
    def test_owner_removes_admin(self, document):
        membership.remove(document, document.find_member("owner"), document.find_member("admin"))
        assert not document.is_member("admin")

    def test_admin_cannot_remove_admin(self, document):
        with pytest.raises(ForbiddenError):
            membership.remove(document, document.find_member("admin"), document.find_member("admin2"))

    def test_admin_removes_collaborator(self, document):
        membership.remove(document, document.find_member("admin"), document.find_member("collab"))
        assert not document.is_member("collab")

    def test_nobody_removes_owner(self, document):
        for actor in ("owner", "admin", "collab"):
            with pytest.raises(ForbiddenError):
                membership.remove(document, document.find_member(actor), document.find_member("owner"))

    def test_member_leaves(self, document):
        membership.leave(document, document.find_member("pending"))
        assert not document.is_member("pending")

    def test_owner_cannot_leave(self, document):
        with pytest.raises(ForbiddenError, match="delete the event"):
            membership.leave(document, document.find_member("owner"))


class TestOwnerInvariant:
    def test_consistent_document_passes(self, document):
        membership.assert_single_owner(document)

    def test_second_owner_is_rejected(self, document):
        document.members.append(Membership(user="intruder", permissions=Permission.OWNER))
        with pytest.raises(InternalError):
            membership.assert_single_owner(document)

    def test_owner_must_be_creator(self, document):
        document.created_by = "someone-else"
        with pytest.raises(InternalError):
            membership.assert_single_owner(document)

    def test_duplicate_membership_is_rejected(self, document):
        document.members.append(Membership(user="collab"))
        with pytest.raises(InternalError):
            membership.assert_single_owner(document)
