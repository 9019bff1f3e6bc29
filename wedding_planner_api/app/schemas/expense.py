"""
Pydantic models for budget expenses embedded in an event.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .common import new_id, now_utc


class ExpenseStatus(str, Enum):
    PLANNED = "planned"
    BOOKED = "booked"
    PAID = "paid"
    COMPLETED = "completed"


class ExpenseBase(BaseModel):
    model_config = {"str_strip_whitespace": True}

    category: str = Field(..., min_length=1, example="Venue")
    description: str = Field(..., min_length=1, example="Reception hall deposit")
    budgeted: float = Field(..., ge=0, example=2500)
    actual: float = Field(0, ge=0, example=0)
    vendor: str = Field("", example="Grand Hall")
    date: datetime = Field(default_factory=now_utc)
    status: ExpenseStatus = ExpenseStatus.PLANNED


class ExpenseCreate(ExpenseBase):
    """Schema for adding an expense."""
    pass


class ExpenseUpdate(BaseModel):
    """Schema for updating an expense.

    All fields are optional; only provided fields will be updated.
    """

    model_config = {"str_strip_whitespace": True}

    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    budgeted: Optional[float] = Field(None, ge=0)
    actual: Optional[float] = Field(None, ge=0)
    vendor: Optional[str] = None
    date: Optional[datetime] = None
    status: Optional[ExpenseStatus] = None


class Expense(ExpenseBase):
    """An expense as stored inside the event document."""

    id: str = Field(default_factory=new_id)
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)
