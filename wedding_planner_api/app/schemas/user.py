"""
Pydantic models for user data.

Defines schemas for registering, authenticating and reading users.
Password hashes are never part of a read model.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .common import check_email


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class UserPreferences(BaseModel):
    email_notifications: bool = True
    rsvp_reminders: bool = True
    guest_photo_uploads: bool = True
    public_gallery: bool = True
    guest_list_access: bool = False
    budget_sharing: bool = False
    theme: Theme = Theme.LIGHT
    language: str = "en"


class UserProfile(BaseModel):
    phone: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    location: Optional[str] = None


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=2, example="Anna Smith")
    email: str = Field(..., example="anna@example.com")
    password: str = Field(..., min_length=6, example="strongpassword")
    confirm_password: str = Field(..., example="strongpassword")
    gender: Gender = Field(..., example="female")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a valid email")
        return check_email(value)

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("Password confirmation does not match password")
        return value


class UserLogin(BaseModel):
    email: str = Field(..., example="anna@example.com")
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return value.strip().lower()


class ProfileUpdate(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = Field(None, max_length=20)
    bio: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = None


class PreferencesUpdate(BaseModel):
    """Partial preferences; unknown keys are ignored."""

    model_config = {"extra": "ignore"}

    email_notifications: Optional[bool] = None
    rsvp_reminders: Optional[bool] = None
    guest_photo_uploads: Optional[bool] = None
    public_gallery: Optional[bool] = None
    guest_list_access: Optional[bool] = None
    budget_sharing: Optional[bool] = None
    theme: Optional[Theme] = None
    language: Optional[str] = None


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str
    name: str
    email: str
    gender: Gender
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    profile: UserProfile = Field(default_factory=UserProfile)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class UserSummary(BaseModel):
    """Public subset used when populating event members."""

    id: str
    name: str
    email: str
