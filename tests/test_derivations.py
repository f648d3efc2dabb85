from datetime import date
from decimal import Decimal

from budget_core.derivations import (
    category_breakdown,
    expenses_by_date,
    goal_progress,
    goals_overview,
    recent_expenses,
    totals,
)
from budget_core.models import Goal, LedgerDocument
from budget_core.operations import add_expense, add_goal, add_income, new_document


def _ledger(*expenses):
    doc = new_document()
    for name, amount, category in expenses:
        doc = add_expense(doc, name, amount, category)
    return doc


def test_totals_of_empty_document_are_zero():
    result = totals(LedgerDocument())
    assert result.total_income == 0
    assert result.total_expenses == 0
    assert result.current_balance == 0


def test_totals_do_not_lose_cents():
    doc = new_document()
    for _ in range(10):
        doc = add_income(doc, "Tip", "0.10")
    doc = add_expense(doc, "Gum", "0.30")
    result = totals(doc)
    assert result.total_income == Decimal("1.00")
    assert result.current_balance == Decimal("0.70")
    assert result.to_dict() == {
        "total_income": "1.00",
        "total_expenses": "0.30",
        "current_balance": "0.70",
    }


def test_breakdown_sorted_descending_with_percentages():
    doc = _ledger(
        ("Groceries", 30, "Food"),
        ("Rent", 400, "Housing"),
        ("Dinner", 20, "Food"),
        ("Bus", 50, "Transport"),
    )
    shares = category_breakdown(doc)
    assert [share.category for share in shares] == ["Housing", "Food", "Transport"]
    assert shares[1].amount == Decimal("50")
    amounts = [share.amount for share in shares]
    assert amounts == sorted(amounts, reverse=True)
    assert abs(sum(share.percent for share in shares) - 100) < Decimal("0.0001")
    assert shares[0].percent == Decimal("80")


def test_breakdown_ties_keep_first_seen_order():
    doc = _ledger(("A", 10, "Zeta"), ("B", 10, "Alpha"), ("C", 10, "Mid"))
    assert [share.category for share in category_breakdown(doc)] == ["Zeta", "Alpha", "Mid"]


def test_breakdown_percentages_with_uneven_split():
    doc = _ledger(("A", 1, "x"), ("B", 1, "y"), ("C", 1, "z"))
    shares = category_breakdown(doc)
    assert abs(sum(share.percent for share in shares) - 100) < Decimal("0.0001")
    assert shares[0].to_dict()["percent"] == "33.3"


def test_breakdown_of_no_expenses_is_empty():
    assert category_breakdown(LedgerDocument()) == []


def test_goal_progress_percent():
    progress = goal_progress(Goal("g", "Trip", Decimal("200"), Decimal("50")))
    assert progress.percent == Decimal("25")
    assert progress.is_complete is False
    assert progress.remaining == Decimal("150")


def test_goal_progress_complete_at_target():
    assert goal_progress(Goal("g", "Trip", Decimal("200"), Decimal("200"))).is_complete


def test_goals_overview_keeps_order():
    doc = add_goal(add_goal(new_document(), "Car", 1000), "Trip", 200)
    assert [p.goal.name for p in goals_overview(doc)] == ["Car", "Trip"]


def test_recent_expenses_most_recent_first():
    doc = _ledger(*[(f"E{i}", 1, "x") for i in range(7)])
    recent = recent_expenses(doc, 5)
    assert [exp.name for exp in recent] == ["E6", "E5", "E4", "E3", "E2"]
    assert [exp.name for exp in recent_expenses(doc, 20)][-1] == "E0"
    assert recent_expenses(doc, 0) == []


def test_expenses_by_date_newest_first():
    doc = new_document()
    doc = add_expense(doc, "Old", 1, date="2026-01-01")
    doc = add_expense(doc, "New", 1, date="2026-03-01")
    doc = add_expense(doc, "Same day later", 1, date="2026-01-01")
    ordered = [exp.name for exp in expenses_by_date(doc)]
    assert ordered == ["New", "Same day later", "Old"]
    assert expenses_by_date(doc)[0].date == date(2026, 3, 1)
