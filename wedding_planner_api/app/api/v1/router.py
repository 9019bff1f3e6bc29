"""
Top-level router for version 1 of the API.

This router aggregates domain-specific routers under a unified prefix.
Everything that hangs off a single event (members, guests, expenses,
vendors, seating) shares the ``/events`` prefix with the event routes.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    events,
    expenses,
    guests,
    members,
    seating,
    users,
    vendors,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(members.router, prefix="/events", tags=["members"])
router.include_router(guests.router, prefix="/events", tags=["guests"])
router.include_router(expenses.router, prefix="/events", tags=["expenses"])
router.include_router(vendors.router, prefix="/events", tags=["vendors"])
router.include_router(seating.router, prefix="/events", tags=["seating"])


@router.get("/health", tags=["health"])
async def health() -> dict:
    return {"success": True, "message": "Wedding Planner API is running"}
