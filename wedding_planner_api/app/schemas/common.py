"""
Shared schema helpers.

Every API response uses the same envelope: ``success`` and ``message``
are always present, ``data`` carries the payload on success and
``errors`` carries field level details on validation failures.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

ModelT = TypeVar("ModelT", bound=BaseModel)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


def check_email(value: str) -> str:
    """Lower-case and validate an e-mail address; empty strings pass."""
    value = value.strip().lower()
    if value and not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


def field_errors(exc) -> List[Dict[str, Any]]:
    """Flatten pydantic or request validation errors into ``{field, message}`` pairs."""
    errors = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location), "message": err.get("msg", "Invalid value")})
    return errors


def parse_payload(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    """Validate ``payload`` against ``model`` raising the domain ``ValidationError``."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError("Validation failed", errors=field_errors(exc)) from exc


def envelope(message: str = "", data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


class Envelope(BaseModel):
    """Response wrapper shared by all endpoints."""

    success: bool
    message: str = ""
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[Dict[str, Any]]] = None
