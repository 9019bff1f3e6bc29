"""
Pydantic models for the seating layout snapshot.

The layout is saved and returned as a whole; the server does not edit
individual tables.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import now_utc


class SeatedGuest(BaseModel):
    id: str
    name: str
    is_placeholder: bool = False
    table_id: Optional[str] = None
    relation: str = ""
    dietary: str = ""


class Table(BaseModel):
    id: str
    label: str
    capacity: int = Field(..., ge=0)
    group_id: str
    guests: List[SeatedGuest] = Field(default_factory=list)


class TableGroup(BaseModel):
    id: str
    name: str
    color: str
    tables: List[Table] = Field(default_factory=list)


class SeatingLayout(BaseModel):
    """Layout submitted by the client."""

    total_guests: int = Field(0, ge=0)
    guest_pool: List[SeatedGuest] = Field(default_factory=list)
    table_groups: List[TableGroup] = Field(default_factory=list)


class Seating(SeatingLayout):
    """Layout as stored, stamped with the time of the last save."""

    last_updated: datetime = Field(default_factory=now_utc)


class SeatingUpdate(BaseModel):
    seating_data: SeatingLayout
