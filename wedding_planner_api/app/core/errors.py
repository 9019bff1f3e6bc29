"""Exception hierarchy for the wedding planner.

Every error that may cross the API boundary derives from
``WeddingPlannerError`` and carries the HTTP status it maps to.  The
handlers registered in ``main.create_app`` turn these into the
``{success, message, errors?}`` envelope.
"""

from typing import Any, Dict, List, Optional


class WeddingPlannerError(Exception):
    """Base exception for all domain errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_data(self) -> Optional[Dict[str, Any]]:
        return None


# --- Input ---
class ValidationError(WeddingPlannerError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class IndexOutOfRangeError(ValidationError):
    """A positional address does not point at an existing row."""

    default_message = "Invalid index"


# --- Access ---
class AuthenticationError(WeddingPlannerError):
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(WeddingPlannerError):
    """Authorization failure."""

    status_code = 403
    default_message = "You don't have permission to perform this action"


class NotFoundError(WeddingPlannerError):
    """Absent, or present but not visible to the caller."""

    status_code = 404
    default_message = "Not found"


# --- Conflicts ---
class ConflictError(WeddingPlannerError):
    status_code = 409
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    default_message = "User with this email already exists"


class CodeSpaceExhaustedError(ConflictError):
    default_message = "Could not allocate a unique invite code"


class StaleIndexError(ConflictError):
    """The addressed row moved or vanished since the caller last read it."""

    default_message = "The item at this position has changed, reload and try again"


class ConcurrencyError(ConflictError):
    """Retry budget exhausted under concurrent writes."""

    default_message = "The event was modified concurrently, please retry"

    def to_data(self) -> Optional[Dict[str, Any]]:
        return {"retryable": True}


class VersionConflictError(Exception):
    """Raised by the store when a versioned save finds a newer revision.

    Internal to the mutation policy; never surfaced to callers.
    """

    def __init__(self, event_id: str, expected_version: int) -> None:
        self.event_id = event_id
        self.expected_version = expected_version
        super().__init__(f"Event {event_id} is no longer at version {expected_version}")


# --- Infrastructure ---
class InternalError(WeddingPlannerError):
    status_code = 500
    default_message = "Internal server error"
