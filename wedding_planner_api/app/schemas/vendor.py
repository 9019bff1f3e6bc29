"""
Pydantic models for vendors embedded in an event.

Vendors carry two nested groups, ``contact`` and ``pricing``.  Updates
use the ``*Patch`` variants so that a client can change, say, only
``pricing.deposit_paid`` without resending the rest of the group.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import check_email, new_id, now_utc


class VendorStatus(str, Enum):
    CONSIDERING = "considering"
    CONTACTED = "contacted"
    BOOKED = "booked"
    PAID = "paid"
    CANCELLED = "cancelled"


class VendorContact(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return check_email(value)


class VendorPricing(BaseModel):
    quoted: float = Field(0, ge=0)
    final: Optional[float] = Field(None, ge=0)
    deposit: float = Field(0, ge=0)
    deposit_paid: bool = False


class VendorContactPatch(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value) if value is not None else value


class VendorPricingPatch(BaseModel):
    quoted: Optional[float] = Field(None, ge=0)
    final: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    deposit_paid: Optional[bool] = None


class VendorBase(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=1, example="Bloom & Co")
    category: str = Field(..., min_length=1, example="Florist")
    status: VendorStatus = VendorStatus.CONSIDERING
    contact: VendorContact = Field(default_factory=VendorContact)
    pricing: VendorPricing = Field(default_factory=VendorPricing)
    notes: str = Field("", max_length=1000)
    # Filename handles returned by the blob store
    documents: List[str] = Field(default_factory=list)


class VendorCreate(VendorBase):
    """Schema for adding a vendor."""
    pass


class VendorUpdate(BaseModel):
    """Partial vendor update; nested groups are merged field by field."""

    model_config = {"str_strip_whitespace": True}

    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    status: Optional[VendorStatus] = None
    contact: Optional[VendorContactPatch] = None
    pricing: Optional[VendorPricingPatch] = None
    notes: Optional[str] = Field(None, max_length=1000)
    documents: Optional[List[str]] = None


class Vendor(VendorBase):
    """A vendor as stored inside the event document."""

    id: str = Field(default_factory=new_id)
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)
