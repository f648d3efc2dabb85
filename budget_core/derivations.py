"""Read-only views computed from a ledger document."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from .models import ExpenseRecord, Goal, LedgerDocument, format_amount

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Totals:
    total_income: Decimal
    total_expenses: Decimal
    current_balance: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "total_income": format_amount(self.total_income),
            "total_expenses": format_amount(self.total_expenses),
            "current_balance": format_amount(self.current_balance),
        }


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: Decimal
    percent: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "category": self.category,
            "amount": format_amount(self.amount),
            "percent": f"{self.percent:.1f}",
        }


@dataclass(frozen=True)
class GoalProgress:
    goal: Goal
    percent: Decimal
    is_complete: bool
    remaining: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.goal.to_dict(),
            "percent": f"{self.percent:.1f}",
            "is_complete": self.is_complete,
            "remaining": format_amount(self.remaining),
        }


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, start=ZERO)


def totals(document: LedgerDocument) -> Totals:
    total_income = _sum(record.amount for record in document.income)
    total_expenses = _sum(record.amount for record in document.expenses)
    return Totals(total_income, total_expenses, total_income - total_expenses)


def category_breakdown(document: LedgerDocument) -> List[CategoryShare]:
    """Expenses grouped by category, largest first.

    Equal amounts keep the order in which their categories first appear.
    """
    by_category: Dict[str, Decimal] = {}
    for expense in document.expenses:
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount

    total_expenses = _sum(by_category.values())
    # sorted() is stable, so ties stay in first-encountered order.
    ordered = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryShare(
            category,
            amount,
            amount / total_expenses * HUNDRED if total_expenses else Decimal(0),
        )
        for category, amount in ordered
    ]


def goal_progress(goal: Goal) -> GoalProgress:
    # Goals with target <= 0 are rejected at creation.
    return GoalProgress(
        goal=goal,
        percent=goal.current / goal.target * HUNDRED,
        is_complete=goal.current >= goal.target,
        remaining=max(goal.target - goal.current, ZERO),
    )


def goals_overview(document: LedgerDocument) -> List[GoalProgress]:
    return [goal_progress(goal) for goal in document.goals]


def recent_expenses(document: LedgerDocument, n: int = 5) -> List[ExpenseRecord]:
    """The last ``n`` expenses added, most recent first."""
    if n <= 0:
        return []
    return list(reversed(document.expenses[-n:]))


def expenses_by_date(document: LedgerDocument) -> List[ExpenseRecord]:
    """All expenses, newest date first; same-day entries newest-added first."""
    return sorted(reversed(document.expenses), key=lambda exp: exp.date, reverse=True)
