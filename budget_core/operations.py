"""State transitions over the ledger document.

Each operation validates all of its input first, then returns a new
:class:`LedgerDocument`. The document passed in is never modified, so a
failed call leaves the caller's ledger exactly as it was.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional
from uuid import uuid4

from .exceptions import GoalNotFoundError
from .models import (
    GOAL_CONTRIBUTION_CATEGORY,
    GOAL_CONTRIBUTION_SOURCE,
    ExpenseRecord,
    Goal,
    IncomeRecord,
    LedgerDocument,
)
from .validators import (
    NAME_MAX_LENGTH,
    parse_amount,
    parse_threshold,
    validate_date,
    validate_label,
    validate_required_str,
)

DEFAULT_CATEGORY = "Other"
DEFAULT_SOURCE = "Cash"


def new_id() -> str:
    return str(uuid4())


def new_document() -> LedgerDocument:
    """An empty ledger with default settings."""
    return LedgerDocument()


def add_income(
    document: LedgerDocument,
    name: object,
    amount: object,
    date: Optional[object] = None,
) -> LedgerDocument:
    record = IncomeRecord(
        id=new_id(),
        name=validate_required_str(name, "name", NAME_MAX_LENGTH),
        amount=parse_amount(amount, "amount"),
        date=validate_date(date, "date"),
    )
    return replace(document, income=document.income + (record,))


def add_expense(
    document: LedgerDocument,
    name: object,
    amount: object,
    category: Optional[object] = None,
    date: Optional[object] = None,
    source: Optional[object] = None,
) -> LedgerDocument:
    record = ExpenseRecord(
        id=new_id(),
        name=validate_required_str(name, "name", NAME_MAX_LENGTH),
        amount=parse_amount(amount, "amount"),
        category=validate_label(category, "category", DEFAULT_CATEGORY),
        date=validate_date(date, "date"),
        source=validate_label(source, "source", DEFAULT_SOURCE),
    )
    return replace(document, expenses=document.expenses + (record,))


def delete_expense(document: LedgerDocument, expense_id: str) -> LedgerDocument:
    """Remove an expense; unknown ids return ``document`` itself."""
    remaining = tuple(exp for exp in document.expenses if exp.id != expense_id)
    if len(remaining) == len(document.expenses):
        return document
    return replace(document, expenses=remaining)


def add_goal(document: LedgerDocument, name: object, target: object) -> LedgerDocument:
    goal = Goal(
        id=new_id(),
        name=validate_required_str(name, "name", NAME_MAX_LENGTH),
        target=parse_amount(target, "target"),
    )
    return replace(document, goals=document.goals + (goal,))


def contribute_to_goal(
    document: LedgerDocument,
    goal_id: str,
    amount: object,
) -> LedgerDocument:
    """Move money into a goal.

    The goal's ``current`` grows by ``amount`` and a matching
    "Goal Contribution" expense dated today is appended; both land in the
    returned document or neither does.
    """
    value = parse_amount(amount, "amount")
    goal = document.find_goal(goal_id)
    if goal is None:
        raise GoalNotFoundError(f"Goal {goal_id} not found")

    updated_goal = replace(goal, current=goal.current + value)
    contribution = ExpenseRecord(
        id=new_id(),
        name=f'Contribution to "{goal.name}"',
        amount=value,
        category=GOAL_CONTRIBUTION_CATEGORY,
        date=date.today(),
        source=GOAL_CONTRIBUTION_SOURCE,
    )
    return replace(
        document,
        goals=tuple(updated_goal if item.id == goal_id else item for item in document.goals),
        expenses=document.expenses + (contribution,),
    )


def set_alert_threshold(document: LedgerDocument, value: object) -> LedgerDocument:
    threshold = parse_threshold(value)
    return replace(document, settings=replace(document.settings, alert_threshold=threshold))