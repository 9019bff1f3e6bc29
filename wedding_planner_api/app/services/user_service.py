"""
Business logic for users.

Passwords are hashed with ``core.security.hash_password`` before they
reach the database and never leave this module: every read model is a
``UserRead`` without the hash.
"""

import json
import logging
import sqlite3
from typing import Dict, Iterable, Optional

from ..core.db import get_connection
from ..core.errors import AuthenticationError, DuplicateEmailError, NotFoundError, ValidationError
from ..core.security import hash_password, verify_password
from ..schemas.common import new_id, now_utc, parse_payload
from ..schemas.user import (
    PreferencesUpdate,
    ProfileUpdate,
    UserCreate,
    UserPreferences,
    UserProfile,
    UserRead,
    UserSummary,
)

logger = logging.getLogger(__name__)

_READ_COLUMNS = "id, name, email, gender, preferences, profile, created_at, updated_at"


def _to_user(row: sqlite3.Row) -> UserRead:
    return UserRead(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        gender=row["gender"],
        preferences=UserPreferences.model_validate(json.loads(row["preferences"] or "{}")),
        profile=UserProfile.model_validate(json.loads(row["profile"] or "{}")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserService:
    """Service for registering, authenticating and updating users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user.

        Raises ``DuplicateEmailError`` if the e-mail is already in use.
        The unique index on ``users.email`` backs up the explicit check.
        """
        logger.info("Registering user %s", data.email)
        user_id = new_id()
        now = now_utc().isoformat()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            exists = cursor.execute("SELECT 1 FROM users WHERE email = ?", (data.email,)).fetchone()
            if exists:
                raise DuplicateEmailError()
            try:
                cursor.execute(
                    "INSERT INTO users (id, name, email, password, gender, preferences, profile, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        user_id,
                        data.name,
                        data.email,
                        hash_password(data.password),
                        data.gender.value,
                        UserPreferences().model_dump_json(),
                        UserProfile().model_dump_json(),
                        now,
                        now,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateEmailError() from exc
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        return await cls.get_user(user_id)

    @classmethod
    async def authenticate(cls, email: str, password: str) -> UserRead:
        """Return the user for valid credentials.

        The same ``AuthenticationError`` is raised for an unknown e-mail
        and for a wrong password.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_READ_COLUMNS}, password FROM users WHERE email = ?",
                (email.strip().lower(),),
            ).fetchone()
        finally:
            conn.close()
        if not row or not verify_password(password, row["password"]):
            raise AuthenticationError("Invalid email or password")
        return _to_user(row)

    @classmethod
    async def get_user(cls, user_id: str) -> UserRead:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {_READ_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        if not row:
            raise NotFoundError("User not found")
        return _to_user(row)

    @classmethod
    def get_summaries(cls, user_ids: Iterable[str]) -> Dict[str, UserSummary]:
        """Name and e-mail for each id, used to populate event members."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT id, name, email FROM users WHERE id IN ({placeholders})",
                tuple(ids),
            ).fetchall()
        finally:
            conn.close()
        return {row["id"]: UserSummary(id=row["id"], name=row["name"], email=row["email"]) for row in rows}

    @classmethod
    async def update_profile(cls, user_id: str, updates: ProfileUpdate) -> UserRead:
        user = await cls.get_user(user_id)
        changes = updates.model_dump(exclude_unset=True)
        name = changes.pop("name", user.name)
        if name is None:
            raise ValidationError("Validation failed", errors=[{"field": "name", "message": "Name cannot be null"}])
        # null clears a profile field
        profile = parse_payload(UserProfile, {**user.profile.model_dump(), **changes})
        cls._write(user_id, name=name, profile=profile.model_dump_json())
        logger.info("Profile updated for user %s", user_id)
        return await cls.get_user(user_id)

    @classmethod
    async def update_preferences(cls, user_id: str, updates: PreferencesUpdate) -> UserRead:
        """Merge known preference keys; anything else was dropped by the schema."""
        user = await cls.get_user(user_id)
        changes = updates.model_dump(exclude_unset=True)
        preferences = parse_payload(UserPreferences, {**user.preferences.model_dump(), **changes})
        cls._write(user_id, preferences=preferences.model_dump_json())
        return await cls.get_user(user_id)

    @classmethod
    def set_password(cls, email: str, password: str) -> bool:
        """Replace the password hash for ``email``; returns ``False`` if no such user."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET password = ?, updated_at = ? WHERE email = ?",
                (hash_password(password), now_utc().isoformat(), email.strip().lower()),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    @classmethod
    def _write(cls, user_id: str, **fields: Optional[str]) -> None:
        assignments = ", ".join(f"{key} = ?" for key in fields)
        values = list(fields.values()) + [now_utc().isoformat(), user_id]
        conn = get_connection()
        try:
            conn.execute(f"UPDATE users SET {assignments}, updated_at = ? WHERE id = ?", tuple(values))
            conn.commit()
        finally:
            conn.close()
