"""
Membership lifecycle within an event.

Permission levels move ``pending_approval -> collaborator -> admin``
and back under the guards below.  ``owner`` is assigned only when the
event is created and can never be granted, changed or removed.

All functions work on an ``EventDocument`` in memory and raise
``ForbiddenError`` when a guard fails.  Persisting the result is up to
the caller.
"""

from typing import Optional

from ..core.errors import ForbiddenError, InternalError, NotFoundError
from ..schemas.event import EventDocument, MemberRole, Membership, Permission
from ..schemas.user import Gender

MANAGERS = {Permission.OWNER, Permission.ADMIN}


def role_for_creator(gender: Optional[str]) -> MemberRole:
    return MemberRole.BRIDE if gender == Gender.FEMALE.value else MemberRole.GROOM


def create_owner(user_id: str, gender: Optional[str] = None) -> Membership:
    """Membership of the event creator; the only way to obtain ``owner``."""
    return Membership(user=user_id, role=role_for_creator(gender), permissions=Permission.OWNER)


def join(event: EventDocument, user_id: str) -> bool:
    """Add ``user_id`` as a pending guest.

    Returns ``False`` without touching the event if the user is already
    a member.
    """
    if event.is_member(user_id):
        return False
    event.members.append(Membership(user=user_id))
    return True


def get_target(event: EventDocument, user_id: str) -> Membership:
    target = event.find_member(user_id)
    if target is None:
        raise NotFoundError("Member not found")
    return target


def check_set_permission(actor: Membership, target: Membership, new_permission: Permission) -> None:
    if actor.permissions not in MANAGERS:
        raise ForbiddenError("Only event owners or admins can change permissions")
    if target.permissions == Permission.OWNER:
        raise ForbiddenError("The event owner's permissions cannot be changed")
    if new_permission == Permission.OWNER:
        raise ForbiddenError("Ownership cannot be granted")
    if new_permission == Permission.ADMIN and actor.permissions != Permission.OWNER:
        raise ForbiddenError("Only the event owner can promote members to admin")
    if (
        target.permissions == Permission.ADMIN
        and new_permission != Permission.ADMIN
        and actor.permissions != Permission.OWNER
    ):
        raise ForbiddenError("Only the event owner can change an admin's permissions")


def set_permission(actor: Membership, target: Membership, new_permission: Permission) -> bool:
    """Apply ``new_permission`` to ``target``; returns whether it changed."""
    check_set_permission(actor, target, new_permission)
    if target.permissions == new_permission:
        return False
    target.permissions = new_permission
    return True


def set_role(actor: Membership, target: Membership, role: MemberRole) -> bool:
    if actor.permissions not in MANAGERS:
        raise ForbiddenError("Only event owners or admins can change member roles")
    if target.permissions == Permission.OWNER and actor.permissions != Permission.OWNER:
        raise ForbiddenError("Only the event owner can change their own role")
    if target.permissions == Permission.ADMIN and actor.permissions != Permission.OWNER and actor.user != target.user:
        raise ForbiddenError("Only the event owner can change an admin's role")
    if target.role == role:
        return False
    target.role = role
    return True


def check_remove(actor: Membership, target: Membership) -> None:
    if target.permissions == Permission.OWNER:
        raise ForbiddenError("The event owner cannot be removed")
    if actor.permissions not in MANAGERS:
        raise ForbiddenError("Only event owners or admins can remove members")
    if target.permissions == Permission.ADMIN and actor.permissions != Permission.OWNER:
        raise ForbiddenError("Only the event owner can remove an admin")


def remove(event: EventDocument, actor: Membership, target: Membership) -> None:
    check_remove(actor, target)
    event.members = [m for m in event.members if m.user != target.user]


def leave(event: EventDocument, member: Membership) -> None:
    if member.permissions == Permission.OWNER:
        raise ForbiddenError("Event creator cannot leave the event. Please delete the event instead.")
    event.members = [m for m in event.members if m.user != member.user]


def assert_single_owner(event: EventDocument) -> None:
    """Check the owner invariant before a document is written."""
    owners = event.owners()
    if len(owners) != 1 or owners[0].user != event.created_by:
        raise InternalError("Event ownership is inconsistent")
    users = [m.user for m in event.members]
    if len(users) != len(set(users)):
        raise InternalError("Duplicate membership")
