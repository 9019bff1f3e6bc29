"""
Authorization decisions for event-scoped operations.

``authorize`` is a pure function of a membership snapshot and the
level an operation requires.  ``OPERATION_LEVELS`` is the one place
where each operation's level is defined; services look their level up
here instead of checking permissions inline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.errors import ForbiddenError, NotFoundError
from ..schemas.event import Membership, Permission


class AccessLevel(str, Enum):
    MEMBER = "member"
    ACTIVE_COLLABORATOR = "active_collaborator"
    OWNER_OR_ADMIN = "owner_or_admin"
    OWNER = "owner"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""


ALLOW = Decision(True)

DENY_MESSAGES = {
    AccessLevel.MEMBER: "Not a member",
    AccessLevel.ACTIVE_COLLABORATOR: "Your access is pending approval",
    AccessLevel.OWNER_OR_ADMIN: "Only event owners or admins can perform this action",
    AccessLevel.OWNER: "Only the event owner can perform this action",
}

OPERATION_LEVELS = {
    "event.read": AccessLevel.MEMBER,
    "event.update": AccessLevel.OWNER,
    "event.delete": AccessLevel.OWNER,
    "settings.read": AccessLevel.ACTIVE_COLLABORATOR,
    "settings.update": AccessLevel.OWNER,
    "members.read": AccessLevel.MEMBER,
    "members.set_permission": AccessLevel.OWNER_OR_ADMIN,
    "members.set_role": AccessLevel.OWNER_OR_ADMIN,
    "members.remove": AccessLevel.OWNER_OR_ADMIN,
    "members.leave": AccessLevel.MEMBER,
    "guests.read": AccessLevel.ACTIVE_COLLABORATOR,
    "guests.write": AccessLevel.ACTIVE_COLLABORATOR,
    "expenses.read": AccessLevel.ACTIVE_COLLABORATOR,
    "expenses.write": AccessLevel.ACTIVE_COLLABORATOR,
    "vendors.read": AccessLevel.ACTIVE_COLLABORATOR,
    "vendors.write": AccessLevel.ACTIVE_COLLABORATOR,
    "seating.read": AccessLevel.ACTIVE_COLLABORATOR,
    "seating.write": AccessLevel.ACTIVE_COLLABORATOR,
}


def authorize(membership: Optional[Membership], level: AccessLevel) -> Decision:
    if membership is None:
        return Decision(False, DENY_MESSAGES[AccessLevel.MEMBER])
    permission = membership.permissions
    if level == AccessLevel.OWNER:
        allowed = permission == Permission.OWNER
    elif level == AccessLevel.OWNER_OR_ADMIN:
        allowed = permission in (Permission.OWNER, Permission.ADMIN)
    elif level == AccessLevel.ACTIVE_COLLABORATOR:
        allowed = permission != Permission.PENDING_APPROVAL
    else:
        allowed = True
    return ALLOW if allowed else Decision(False, DENY_MESSAGES[level])


def require(membership: Optional[Membership], operation: str) -> Membership:
    """Raise unless ``membership`` may perform ``operation``.

    A missing membership is reported as ``NotFoundError`` so that
    outsiders cannot tell an unknown event from one they cannot see.
    """
    decision = authorize(membership, OPERATION_LEVELS[operation])
    if membership is None:
        raise NotFoundError("Event not found or you don't have access")
    if not decision.allowed:
        raise ForbiddenError(decision.reason)
    return membership
