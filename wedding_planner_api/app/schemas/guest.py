"""
Pydantic models for the guest list embedded in an event.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import check_email, new_id, now_utc


class RSVPStatus(str, Enum):
    ATTENDING = "Attending"
    NOT_ATTENDING = "Not Attending"
    PENDING = "Pending"


class GuestBase(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=1, example="Aunt Mary")
    relation: str = Field("", example="Bride's family")
    dietary: str = Field("", example="Vegetarian")
    rsvp: RSVPStatus = RSVPStatus.PENDING
    email: str = ""
    phone: str = ""

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)


class GuestCreate(GuestBase):
    """Schema for adding a guest."""
    pass


class GuestUpdate(BaseModel):
    """Schema for updating a guest.

    All fields are optional; only provided fields will be updated.
    """

    model_config = {"str_strip_whitespace": True}

    name: Optional[str] = Field(None, min_length=1)
    relation: Optional[str] = None
    dietary: Optional[str] = None
    rsvp: Optional[RSVPStatus] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value) if value is not None else value


class Guest(GuestBase):
    """A guest as stored inside the event document."""

    id: str = Field(default_factory=new_id)
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)
