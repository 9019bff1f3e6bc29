"""
Business logic for the budget expenses of an event.
"""

from typing import Any, Dict

from ..schemas.expense import Expense, ExpenseCreate, ExpenseUpdate
from .collection_service import CollectionService
from .event_service import EventService


class ExpenseService(CollectionService):
    collection = "expenses"
    item_model = Expense
    create_model = ExpenseCreate
    update_model = ExpenseUpdate

    @classmethod
    async def summary(cls, event_id: str, current_user: dict) -> Dict[str, Any]:
        """Budget totals for the event's expenses against ``settings.budget``."""
        event = await EventService.get_event(event_id, current_user, "expenses.read")
        budgeted = sum(e.budgeted for e in event.expenses)
        actual = sum(e.actual for e in event.expenses)
        return {
            "budget": event.settings.budget,
            "total_budgeted": budgeted,
            "total_actual": actual,
            "remaining": event.settings.budget - actual,
        }
