"""Shared fixtures for the wedding planner test suite."""

from typing import Any, Dict

import pytest

from wedding_planner_api.app.core.config import settings
from wedding_planner_api.app.core.db import init_db
from wedding_planner_api.app.schemas.event import EventDocument, MemberRole, Membership, Permission
from wedding_planner_api.app.schemas.user import UserCreate
from wedding_planner_api.app.services.event_service import EventService
from wedding_planner_api.app.services.member_service import MemberService
from wedding_planner_api.app.services.user_service import UserService


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def db(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with all migrations applied."""
    path = tmp_path / "wedding_planner_test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


# ---------------------------------------------------------------------------
# Users and events
# ---------------------------------------------------------------------------

def as_current_user(user) -> Dict[str, Any]:
    """Shape a ``UserRead`` like the payload of ``get_current_user``."""
    return {
        "sub": user.id,
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "gender": user.gender.value,
    }


@pytest.fixture
def make_user(db):
    """Async factory registering a user and returning its auth payload."""

    async def _make(name: str = "Anna Smith", email: str = "", gender: str = "female") -> Dict[str, Any]:
        email = email or f"{name.split()[0].lower()}@example.com"
        user = await UserService.create_user(
            UserCreate(
                name=name,
                email=email,
                password="secret1",
                confirm_password="secret1",
                gender=gender,
            )
        )
        return as_current_user(user)

    return _make


@pytest.fixture
def event_payload() -> Dict[str, Any]:
    return {
        "name": "Anna & Tom",
        "description": "Summer wedding by the lake",
        "event_date": "2026-07-18T15:00:00Z",
        "location": "Lakeside Manor",
    }


@pytest.fixture
async def owner(make_user):
    return await make_user("Anna Smith", gender="female")


@pytest.fixture
async def event(owner, event_payload) -> EventDocument:
    return await EventService.create_event(event_payload, owner)


@pytest.fixture
async def collaborator(make_user, owner, event):
    """A second user who joined ``event`` and was approved by the owner."""
    user = await make_user("Tom Brown", gender="male")
    await EventService.join_by_invite_code(event.invite_code, user)
    await MemberService.set_permission(event.id, user["user_id"], Permission.COLLABORATOR, owner)
    return user


# ---------------------------------------------------------------------------
# In-memory documents for the pure rules
# ---------------------------------------------------------------------------

def _member(user: str, permissions: Permission, role: MemberRole = MemberRole.GUEST) -> Membership:
    return Membership(user=user, role=role, permissions=permissions)


@pytest.fixture
def document() -> EventDocument:
    """An event with one member at every permission level."""
    return EventDocument(
        name="Anna & Tom",
        event_date="2026-07-18T15:00:00Z",
        created_by="owner",
        invite_code="ABCD1234",
        members=[
            _member("owner", Permission.OWNER, MemberRole.BRIDE),
            _member("admin", Permission.ADMIN),
            _member("admin2", Permission.ADMIN),
            _member("collab", Permission.COLLABORATOR),
            _member("pending", Permission.PENDING_APPROVAL),
        ],
    )
