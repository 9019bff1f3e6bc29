"""
Pydantic models for event data.

``EventDocument`` is the aggregate persisted as one JSON document: it
owns the members, guests, expenses, vendors, settings and seating of
an event.  ``EventCreate`` and ``EventUpdate`` are the request bodies
for creating and patching the top-level fields.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import new_id, now_utc
from .expense import Expense
from .guest import Guest
from .seating import Seating
from .vendor import Vendor
from ..services.invite_code import is_valid_invite_code, normalize_invite_code


class EventType(str, Enum):
    WEDDING = "wedding"
    ENGAGEMENT = "engagement"
    ANNIVERSARY = "anniversary"
    OTHER = "other"


class MemberRole(str, Enum):
    BRIDE = "bride"
    GROOM = "groom"
    FAMILY = "family"
    FRIEND = "friend"
    GUEST = "guest"


class Permission(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    COLLABORATOR = "collaborator"
    PENDING_APPROVAL = "pending_approval"


class Membership(BaseModel):
    user: str
    role: MemberRole = MemberRole.GUEST
    permissions: Permission = Permission.PENDING_APPROVAL
    joined_at: datetime = Field(default_factory=now_utc)


class EventSettings(BaseModel):
    budget: float = Field(0, ge=0)
    guest_photo_uploads: bool = True
    email_notifications: bool = True
    guest_list_access: bool = False
    public_gallery: bool = True
    budget_sharing: bool = False
    rsvp_reminders: bool = True


class SettingsUpdate(BaseModel):
    """Partial settings; keys outside the settings schema are ignored."""

    model_config = {"extra": "ignore"}

    budget: Optional[float] = Field(None, ge=0)
    guest_photo_uploads: Optional[bool] = None
    email_notifications: Optional[bool] = None
    guest_list_access: Optional[bool] = None
    public_gallery: Optional[bool] = None
    budget_sharing: Optional[bool] = None
    rsvp_reminders: Optional[bool] = None


class EventBase(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=2, example="Anna & Tom")
    description: Optional[str] = Field(None, max_length=500, example="Summer wedding by the lake")
    event_type: EventType = Field(EventType.WEDDING, example="wedding")
    event_date: datetime = Field(..., example="2026-07-18T15:00:00Z")
    location: Optional[str] = Field(None, max_length=200, example="Lakeside Manor")


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.
    ``budget`` is shorthand for ``settings.budget``.
    """

    model_config = {"str_strip_whitespace": True, "extra": "ignore"}

    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = Field(None, max_length=500)
    event_type: Optional[EventType] = None
    event_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=200)
    budget: Optional[float] = Field(None, ge=0)


class JoinRequest(BaseModel):
    """Invite codes are matched case-insensitively; other characters are rejected."""

    invite_code: str = Field(..., min_length=8, max_length=8, example="K3Q9ZT2A")

    model_config = {"str_strip_whitespace": True}

    @field_validator("invite_code")
    @classmethod
    def _invite_code(cls, value: str) -> str:
        code = normalize_invite_code(value)
        if not is_valid_invite_code(code):
            raise ValueError("Invalid invite code format")
        return code


class PermissionUpdate(BaseModel):
    permissions: Permission


class RoleUpdate(BaseModel):
    role: MemberRole


class EventDocument(EventBase):
    """The event aggregate as stored.

    ``version`` mirrors the store's revision counter; it is not part of
    the stored JSON and is filled in on every load.
    """

    id: str = Field(default_factory=new_id)
    created_by: str
    invite_code: str
    is_active: bool = True
    settings: EventSettings = Field(default_factory=EventSettings)
    members: List[Membership] = Field(default_factory=list)
    guests: List[Guest] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    vendors: List[Vendor] = Field(default_factory=list)
    seating: Optional[Seating] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)
    version: int = 0

    def find_member(self, user_id: str) -> Optional[Membership]:
        for member in self.members:
            if member.user == user_id:
                return member
        return None

    def is_member(self, user_id: str) -> bool:
        return self.find_member(user_id) is not None

    def owners(self) -> List[Membership]:
        return [m for m in self.members if m.permissions == Permission.OWNER]
