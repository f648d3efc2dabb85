"""Framework-agnostic business services for the budget tracker."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from . import operations
from .alerts import AlertResult
from .derivations import (
    CategoryShare,
    GoalProgress,
    Totals,
    category_breakdown,
    expenses_by_date,
    goal_progress,
    goals_overview,
    recent_expenses,
    totals,
)
from .exceptions import GoalNotFoundError, ValidationError
from .models import ExpenseRecord, Goal, IncomeRecord, LedgerDocument
from .storage import RecordStore

logger = logging.getLogger(__name__)

RECENT_EXPENSES_LIMIT = 5


def _require_mapping(payload: object) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("payload must be an object")
    return payload


class BudgetService:
    """Runs ledger mutations as store transactions and assembles views."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store

    # Mutations ------------------------------------------------------------
    def add_income(self, payload: Mapping[str, Any]) -> IncomeRecord:
        data = _require_mapping(payload)
        document = self._store.transaction(
            operations.add_income, data.get("name"), data.get("amount"), data.get("date")
        )
        record = document.income[-1]
        logger.info("Income %s added: %s", record.id, record.amount)
        return record

    def add_expense(self, payload: Mapping[str, Any]) -> ExpenseRecord:
        data = _require_mapping(payload)
        document = self._store.transaction(
            operations.add_expense,
            data.get("name"),
            data.get("amount"),
            category=data.get("category"),
            date=data.get("date"),
            source=data.get("source"),
        )
        record = document.expenses[-1]
        logger.info("Expense %s added: %s (%s)", record.id, record.amount, record.category)
        return record

    def delete_expense(self, expense_id: str) -> None:
        self._store.transaction(operations.delete_expense, expense_id)
        logger.info("Expense %s deleted", expense_id)

    def add_goal(self, payload: Mapping[str, Any]) -> Goal:
        data = _require_mapping(payload)
        document = self._store.transaction(
            operations.add_goal, data.get("name"), data.get("target")
        )
        goal = document.goals[-1]
        logger.info("Goal %s added with target %s", goal.id, goal.target)
        return goal

    def contribute(self, goal_id: str, payload: Mapping[str, Any]) -> GoalProgress:
        """Contribute to a goal and return its refreshed progress."""
        data = _require_mapping(payload)
        try:
            document = self._store.transaction(
                operations.contribute_to_goal, goal_id, data.get("amount")
            )
        except GoalNotFoundError:
            logger.warning("Contribution rejected: goal %s not found", goal_id)
            raise
        goal = document.find_goal(goal_id)
        logger.info("Contributed %s to goal %s", document.expenses[-1].amount, goal_id)
        return goal_progress(goal)

    def set_alert_threshold(self, value: object) -> LedgerDocument:
        document = self._store.transaction(operations.set_alert_threshold, value)
        logger.info("Alert threshold set to %s", document.settings.alert_threshold)
        return document

    def reset(self) -> None:
        """Delete all data and re-arm the low-balance notification."""
        self._store.reset()
        logger.info("Ledger reset")

    # Queries --------------------------------------------------------------
    def document(self) -> LedgerDocument:
        return self._store.load()

    def totals(self) -> Totals:
        return totals(self._store.load())

    def breakdown(self) -> List[CategoryShare]:
        return category_breakdown(self._store.load())

    def goals(self) -> List[GoalProgress]:
        return goals_overview(self._store.load())

    def expenses(self) -> List[ExpenseRecord]:
        return expenses_by_date(self._store.load())

    def alert(self) -> AlertResult:
        return self._store.check_alert()[1]

    def summary(self, recent: int = RECENT_EXPENSES_LIMIT) -> Dict[str, Any]:
        """Dashboard snapshot built from a single load of the document."""
        document, alert = self._store.check_alert()
        return {
            "totals": totals(document).to_dict(),
            "recent_expenses": [exp.to_dict() for exp in recent_expenses(document, recent)],
            "goals": [progress.to_dict() for progress in goals_overview(document)],
            "alert": alert.to_dict(),
        }
