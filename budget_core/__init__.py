"""Core business logic package for the budget tracker."""

from .alerts import AlertResult, AlertSession, AlertState, evaluate_alert
from .derivations import (
    category_breakdown,
    expenses_by_date,
    goal_progress,
    goals_overview,
    recent_expenses,
    totals,
)
from .exceptions import GoalNotFoundError, PersistenceError, RecordNotFoundError, ValidationError
from .models import ExpenseRecord, Goal, IncomeRecord, LedgerDocument, Settings
from .operations import (
    add_expense,
    add_goal,
    add_income,
    contribute_to_goal,
    delete_expense,
    set_alert_threshold,
)
from .services import BudgetService
from .storage import JSONStorage, RecordStore

__all__ = [
    "AlertResult",
    "AlertSession",
    "AlertState",
    "BudgetService",
    "ExpenseRecord",
    "Goal",
    "GoalNotFoundError",
    "IncomeRecord",
    "JSONStorage",
    "LedgerDocument",
    "PersistenceError",
    "RecordNotFoundError",
    "RecordStore",
    "Settings",
    "ValidationError",
    "add_expense",
    "add_goal",
    "add_income",
    "category_breakdown",
    "contribute_to_goal",
    "delete_expense",
    "evaluate_alert",
    "expenses_by_date",
    "goal_progress",
    "goals_overview",
    "recent_expenses",
    "set_alert_threshold",
    "totals",
]
