"""
Vendor endpoints for API v1.

``PATCH`` merges ``contact`` and ``pricing`` field by field, so
``{"pricing": {"deposit_paid": true}}`` leaves the quote untouched.
"""

from fastapi import APIRouter, Depends, status

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.vendor import VendorCreate, VendorUpdate
from wedding_planner_api.app.services.vendor_service import VendorService


router = APIRouter()


@router.get("/{event_id}/vendors", response_model=Envelope, response_model_exclude_none=True)
async def list_vendors(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    vendors = await VendorService.list_items(event_id, current_user)
    return envelope(
        "Vendors retrieved successfully",
        {"vendors": [v.model_dump(mode="json") for v in vendors]},
    )


@router.post(
    "/{event_id}/vendors",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_vendor(
    event_id: str,
    vendor: VendorCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await VendorService.add_item(event_id, vendor, current_user)
    return envelope("Vendor added successfully", {"vendor": result.value.model_dump(mode="json")})


@router.get("/{event_id}/vendors/{vendor_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_vendor(event_id: str, vendor_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    vendor = await VendorService.get_item(event_id, vendor_id, current_user)
    return envelope("Vendor retrieved successfully", {"vendor": vendor.model_dump(mode="json")})


@router.patch("/{event_id}/vendors/{vendor_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_vendor(
    event_id: str,
    vendor_id: str,
    updates: VendorUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await VendorService.update_item(event_id, vendor_id, updates, current_user)
    return envelope("Vendor updated successfully", {"vendor": result.value.model_dump(mode="json")})


@router.delete("/{event_id}/vendors/{vendor_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_vendor(event_id: str, vendor_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    await VendorService.delete_item(event_id, vendor_id, current_user)
    return envelope("Vendor deleted successfully")
