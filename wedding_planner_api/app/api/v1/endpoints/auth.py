"""
Authentication endpoints for API v1.

Registration and login return a bearer token together with the user
record.  Profile and preference routes act on the authenticated user.
"""

from fastapi import APIRouter, Depends, status

from wedding_planner_api.app.core.security import create_access_token, get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.user import (
    PreferencesUpdate,
    ProfileUpdate,
    UserCreate,
    UserLogin,
    UserRead,
)
from wedding_planner_api.app.services.user_service import UserService


router = APIRouter()


def _with_token(user: UserRead) -> dict:
    return {
        "token": create_access_token({"sub": user.id}),
        "token_type": "bearer",
        "user": user.model_dump(mode="json"),
    }


@router.post(
    "/register",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(user: UserCreate) -> dict:
    """Register a new user and log them in."""
    created = await UserService.create_user(user)
    return envelope("User registered successfully", _with_token(created))


@router.post("/login", response_model=Envelope, response_model_exclude_none=True)
async def login(credentials: UserLogin) -> dict:
    """Exchange e-mail and password for an access token.

    Unknown e-mail and wrong password produce the same 401 so that the
    endpoint cannot be used to discover registered addresses.
    """
    user = await UserService.authenticate(credentials.email, credentials.password)
    return envelope("Login successful", _with_token(user))


@router.get("/profile", response_model=Envelope, response_model_exclude_none=True)
async def get_profile(current_user: dict = Depends(get_current_user)) -> dict:
    user = await UserService.get_user(current_user["user_id"])
    return envelope("Profile retrieved successfully", {"user": user.model_dump(mode="json")})


@router.put("/profile", response_model=Envelope, response_model_exclude_none=True)
async def update_profile(
    updates: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    user = await UserService.update_profile(current_user["user_id"], updates)
    return envelope("Profile updated successfully", {"user": user.model_dump(mode="json")})


@router.put("/preferences", response_model=Envelope, response_model_exclude_none=True)
async def update_preferences(
    updates: PreferencesUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Update notification and display preferences; unknown keys are ignored."""
    user = await UserService.update_preferences(current_user["user_id"], updates)
    return envelope(
        "Preferences updated successfully",
        {"preferences": user.preferences.model_dump(mode="json")},
    )


@router.get("/verify", response_model=Envelope, response_model_exclude_none=True)
async def verify_token(current_user: dict = Depends(get_current_user)) -> dict:
    """Check that the bearer token is valid and its user still exists."""
    user = await UserService.get_user(current_user["user_id"])
    return envelope("Token is valid", {"user": user.model_dump(mode="json")})
