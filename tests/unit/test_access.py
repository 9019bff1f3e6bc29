"""Tests for the access gate.

Covers:
- the decision matrix of ``authorize`` per access level
- ``require`` hiding events from non-members behind a 404
- every operation key mapping to a known level
"""

import pytest

from wedding_planner_api.app.core.errors import ForbiddenError, NotFoundError
from wedding_planner_api.app.schemas.event import Membership, Permission
from wedding_planner_api.app.services.access import (
    OPERATION_LEVELS,
    AccessLevel,
    authorize,
    require,
)


def _as(permission: Permission) -> Membership:
    return Membership(user="u1", permissions=permission)


# Expected outcome per (level, permission)
MATRIX = {
    AccessLevel.MEMBER: {
        Permission.OWNER: True,
        Permission.ADMIN: True,
        Permission.COLLABORATOR: True,
        Permission.PENDING_APPROVAL: True,
    },
    AccessLevel.ACTIVE_COLLABORATOR: {
        Permission.OWNER: True,
        Permission.ADMIN: True,
        Permission.COLLABORATOR: True,
        Permission.PENDING_APPROVAL: False,
    },
    AccessLevel.OWNER_OR_ADMIN: {
        Permission.OWNER: True,
        Permission.ADMIN: True,
        Permission.COLLABORATOR: False,
        Permission.PENDING_APPROVAL: False,
    },
    AccessLevel.OWNER: {
        Permission.OWNER: True,
        Permission.ADMIN: False,
        Permission.COLLABORATOR: False,
        Permission.PENDING_APPROVAL: False,
    },
}


class TestAuthorize:
    @pytest.mark.parametrize(
        "level,permission,allowed",
        [(level, perm, allowed) for level, row in MATRIX.items() for perm, allowed in row.items()],
    )
    def test_matrix(self, level, permission, allowed):
        decision = authorize(_as(permission), level)
        assert decision.allowed is allowed
        assert (decision.reason == "") is allowed

    @pytest.mark.parametrize("level", list(AccessLevel))
    def test_non_member_is_always_denied(self, level):
        decision = authorize(None, level)
        assert not decision.allowed
        assert decision.reason == "Not a member"

    def test_pending_reason(self):
        decision = authorize(_as(Permission.PENDING_APPROVAL), AccessLevel.ACTIVE_COLLABORATOR)
        assert decision.reason == "Your access is pending approval"


class TestRequire:
    def test_non_member_gets_not_found(self):
        with pytest.raises(NotFoundError):
            require(None, "event.read")

    def test_denied_member_gets_forbidden(self):
        with pytest.raises(ForbiddenError, match="pending approval"):
            require(_as(Permission.PENDING_APPROVAL), "guests.write")

    def test_returns_membership_when_allowed(self):
        membership = _as(Permission.OWNER)
        assert require(membership, "event.delete") is membership

    def test_admin_cannot_change_settings(self):
        with pytest.raises(ForbiddenError):
            require(_as(Permission.ADMIN), "settings.update")

    def test_unknown_operation_is_a_programming_error(self):
        with pytest.raises(KeyError):
            require(_as(Permission.OWNER), "guests.teleport")


def test_every_operation_has_a_level():
    assert all(isinstance(level, AccessLevel) for level in OPERATION_LEVELS.values())
    for collection in ("guests", "expenses", "vendors", "seating"):
        assert OPERATION_LEVELS[f"{collection}.write"] == AccessLevel.ACTIVE_COLLABORATOR
