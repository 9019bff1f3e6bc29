"""
Persistence of event documents.

Each event is one row in ``events``; the aggregate is serialised into
the ``document`` column.  ``save`` is a compare-and-set on the
``version`` column: it only succeeds if nobody else committed since the
document was loaded, otherwise ``VersionConflictError`` is raised and
the caller decides whether to reload and retry.  The ``event_members``
lookup rows are rewritten in the same transaction as the document.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_connection
from ..core.errors import VersionConflictError
from ..schemas.common import now_utc
from ..schemas.event import EventDocument

logger = logging.getLogger(__name__)

_COLUMNS = "id, version, document"


def _to_document(row: sqlite3.Row) -> EventDocument:
    event = EventDocument.model_validate_json(row["document"])
    event.version = row["version"]
    return event


def _serialize(event: EventDocument) -> str:
    return event.model_dump_json(exclude={"version"})


def _write_members(cursor: sqlite3.Cursor, event: EventDocument) -> None:
    cursor.execute("DELETE FROM event_members WHERE event_id = ?", (event.id,))
    cursor.executemany(
        "INSERT INTO event_members (event_id, user_id) VALUES (?, ?)",
        [(event.id, member.user) for member in event.members],
    )


class EventStore:
    """Document store for events backed by SQLite."""

    @classmethod
    def invite_code_exists(cls, code: str) -> bool:
        """Check a code against all events, active or not."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT 1 FROM events WHERE invite_code = ?", (code,)).fetchone()
            return row is not None
        finally:
            conn.close()

    @classmethod
    def insert(cls, event: EventDocument) -> EventDocument:
        """Persist a new event at version 1.

        Raises ``sqlite3.IntegrityError`` if the invite code is already
        taken (unique index).
        """
        event.version = 1
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO events (id, invite_code, created_by, is_active, version, document, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.invite_code,
                    event.created_by,
                    int(event.is_active),
                    event.version,
                    _serialize(event),
                    event.created_at.isoformat(),
                    event.updated_at.isoformat(),
                ),
            )
            _write_members(cursor, event)
            conn.commit()
            return event
        except sqlite3.Error:
            conn.rollback()
            event.version = 0
            raise
        finally:
            conn.close()

    @classmethod
    def load(cls, event_id: str) -> Optional[EventDocument]:
        """Load an event by id regardless of membership or ``is_active``."""
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {_COLUMNS} FROM events WHERE id = ?", (event_id,)).fetchone()
            return _to_document(row) if row else None
        finally:
            conn.close()

    @classmethod
    def find_for_member(cls, event_id: str, user_id: str) -> Optional[EventDocument]:
        """Load an active event only if ``user_id`` is one of its members."""
        conn = get_connection()
        try:
            row = conn.execute(
                """
                SELECT e.id, e.version, e.document FROM events e
                JOIN event_members m ON m.event_id = e.id
                WHERE e.id = ? AND m.user_id = ? AND e.is_active = 1
                """,
                (event_id, user_id),
            ).fetchone()
            return _to_document(row) if row else None
        finally:
            conn.close()

    @classmethod
    def find_active_by_invite_code(cls, code: str) -> Optional[EventDocument]:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM events WHERE invite_code = ? AND is_active = 1",
                (code,),
            ).fetchone()
            return _to_document(row) if row else None
        finally:
            conn.close()

    @classmethod
    def list_for_user(cls, user_id: str) -> List[EventDocument]:
        """Active events the user belongs to, newest first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                """
                SELECT e.id, e.version, e.document FROM events e
                JOIN event_members m ON m.event_id = e.id
                WHERE m.user_id = ? AND e.is_active = 1
                ORDER BY e.created_at DESC
                """,
                (user_id,),
            ).fetchall()
            return [_to_document(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    def save(cls, event: EventDocument) -> EventDocument:
        """Write ``event`` if the stored version still equals ``event.version``.

        On success the version is incremented in place.  On a lost race
        ``VersionConflictError`` is raised and nothing is written.
        """
        expected = event.version
        updated_at = now_utc()
        previous_updated_at = event.updated_at
        event.updated_at = updated_at
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE events
                SET document = ?, is_active = ?, version = version + 1, updated_at = ?
                WHERE id = ? AND version = ?
                """,
                (_serialize(event), int(event.is_active), updated_at.isoformat(), event.id, expected),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                event.updated_at = previous_updated_at
                logger.warning("Version conflict on event %s at version %s", event.id, expected)
                raise VersionConflictError(event.id, expected)
            _write_members(cursor, event)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            event.updated_at = previous_updated_at
            raise
        finally:
            conn.close()
        event.version = expected + 1
        return event
