"""
Budget expense endpoints for API v1.

Same shape as the guest routes, plus a budget summary.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from wedding_planner_api.app.core.security import get_current_user
from wedding_planner_api.app.schemas.common import Envelope, envelope
from wedding_planner_api.app.schemas.expense import ExpenseCreate, ExpenseUpdate
from wedding_planner_api.app.services.expense_service import ExpenseService
from wedding_planner_api.app.services.mutations import MutationResult


router = APIRouter()


def _result(message: str, result: MutationResult, with_item: bool = True) -> dict:
    data = {
        "expenses": [e.model_dump(mode="json") for e in result.event.expenses],
        "version": result.event.version,
    }
    if with_item:
        data["expense"] = result.value.model_dump(mode="json")
    return envelope(message, data)


@router.get("/{event_id}/expenses", response_model=Envelope, response_model_exclude_none=True)
async def list_expenses(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    expenses = await ExpenseService.list_items(event_id, current_user)
    return envelope(
        "Expenses retrieved successfully",
        {"expenses": [e.model_dump(mode="json") for e in expenses]},
    )


@router.get("/{event_id}/expenses/summary", response_model=Envelope, response_model_exclude_none=True)
async def expense_summary(event_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    summary = await ExpenseService.summary(event_id, current_user)
    return envelope("Budget summary retrieved successfully", summary)


@router.post(
    "/{event_id}/expenses",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_expense(
    event_id: str,
    expense: ExpenseCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await ExpenseService.add_item(event_id, expense, current_user)
    return _result("Expense added successfully", result)


@router.put("/{event_id}/expenses/index/{index}", response_model=Envelope, response_model_exclude_none=True)
async def update_expense_at(
    event_id: str,
    index: int,
    updates: ExpenseUpdate,
    expected_version: Optional[int] = Query(None),
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await ExpenseService.update_item_at(event_id, index, updates, current_user, expected_version)
    return _result("Expense updated successfully", result)


@router.delete("/{event_id}/expenses/index/{index}", response_model=Envelope, response_model_exclude_none=True)
async def delete_expense_at(
    event_id: str,
    index: int,
    expected_version: Optional[int] = Query(None),
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await ExpenseService.delete_item_at(event_id, index, current_user, expected_version)
    return _result("Expense deleted successfully", result, with_item=False)


@router.put("/{event_id}/expenses/{expense_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_expense(
    event_id: str,
    expense_id: str,
    updates: ExpenseUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    result = await ExpenseService.update_item(event_id, expense_id, updates, current_user)
    return _result("Expense updated successfully", result)


@router.delete("/{event_id}/expenses/{expense_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_expense(event_id: str, expense_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    result = await ExpenseService.delete_item(event_id, expense_id, current_user)
    return _result("Expense deleted successfully", result, with_item=False)
