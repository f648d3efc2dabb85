"""Console interface for the budget tracker."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from budget_core.derivations import GoalProgress, recent_expenses
from budget_core.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from budget_core.models import ExpenseRecord
from budget_core.services import BudgetService
from budget_core.storage import JSONStorage, RecordStore


def _parse_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        positive = Decimal(value) > 0
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not positive:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _load_service(data_dir: Path) -> BudgetService:
    return BudgetService(RecordStore(JSONStorage(data_dir)))


def _format_expense(expense: ExpenseRecord) -> str:
    return (
        f"[{expense.id}] {expense.date.isoformat()} {expense.name} -${expense.amount:.2f}\n"
        f"  Category: {expense.category} | Source: {expense.source}\n"
    )


def _format_goal(progress: GoalProgress) -> str:
    goal = progress.goal
    done = " (Completed!)" if progress.is_complete else ""
    return (
        f"[{goal.id}] {goal.name}{done}\n"
        f"  ${goal.current:.2f} saved of ${goal.target:.2f} ({progress.percent:.1f}%)\n"
    )


def report_alert(service: BudgetService) -> None:
    """Print the low-balance banner, plus the one-time notice when it is due."""
    result = service.alert()
    if not result.is_low:
        return
    print(result.banner)
    if result.should_notify:
        print(result.notification)


def handle_income(args: argparse.Namespace, service: BudgetService) -> None:
    if args.command == "add":
        income = service.add_income(
            {"name": args.name, "amount": args.amount, "date": args.date}
        )
        print(f"Income added: [{income.id}] {income.name} +${income.amount:.2f}")
        report_alert(service)


def handle_expense(args: argparse.Namespace, service: BudgetService) -> None:
    if args.command == "add":
        expense = service.add_expense({
            "name": args.name,
            "amount": args.amount,
            "category": args.category,
            "date": args.date,
            "source": args.source,
        })
        print("Expense added:\n" + _format_expense(expense))
        report_alert(service)
    elif args.command == "list":
        expenses = service.expenses()
        if not expenses:
            print("No expenses found.")
            return
        total = service.totals().total_expenses
        print(f"Found {len(expenses)} expenses (total {total:.2f}):")
        for expense in expenses:
            print(_format_expense(expense))
    elif args.command == "delete":
        service.delete_expense(args.id)
        print(f"Expense {args.id} deleted.")
        report_alert(service)


def handle_goal(args: argparse.Namespace, service: BudgetService) -> None:
    if args.command == "add":
        goal = service.add_goal({"name": args.name, "target": args.target})
        print(f"Goal added: [{goal.id}] {goal.name} (target ${goal.target:.2f})")
    elif args.command == "list":
        goals = service.goals()
        if not goals:
            print("No goals set up yet.")
            return
        for progress in goals:
            print(_format_goal(progress))
    elif args.command == "contribute":
        progress = service.contribute(args.id, {"amount": args.amount})
        print("Contribution recorded:\n" + _format_goal(progress))
        report_alert(service)


def handle_threshold(args: argparse.Namespace, service: BudgetService) -> None:
    document = service.set_alert_threshold(args.value)
    print(f"Alert threshold set to ${document.settings.alert_threshold:.2f}")
    report_alert(service)


def handle_summary(args: argparse.Namespace, service: BudgetService) -> None:
    totals = service.totals()
    print(f"Current balance: ${totals.current_balance:.2f}")
    print(f"  + Income: ${totals.total_income:.2f}")
    print(f"  - Spent:  ${totals.total_expenses:.2f}")
    document = service.document()
    recent = recent_expenses(document, args.recent)
    print("Recent expenses:")
    if not recent:
        print("  No expenses added yet.")
    for expense in recent:
        print(f"  {expense.name} ({expense.category}) -${expense.amount:.2f}")
    report_alert(service)


def handle_breakdown(args: argparse.Namespace, service: BudgetService) -> None:
    shares = service.breakdown()
    if not shares:
        print("No expenses to summarize.")
        return
    for share in shares:
        print(f"{share.category}: ${share.amount:.2f} ({share.percent:.1f}%)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Budget Tracker CLI")
    parser.add_argument(
        "--data-dir",
        default=os.getenv("BUDGET_TRACKER_DATA_DIR", "data"),
        type=Path,
        help="Directory to store JSON data (default: $BUDGET_TRACKER_DATA_DIR or ./data)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="entity", required=True)

    income_parser = subparsers.add_parser("income", help="Manage income")
    income_sub = income_parser.add_subparsers(dest="command", required=True)
    income_add = income_sub.add_parser("add", help="Add income")
    income_add.add_argument("name")
    income_add.add_argument("amount", type=_parse_amount)
    income_add.add_argument("--date", type=_parse_date)

    expense_parser = subparsers.add_parser("expense", help="Manage expenses")
    expense_sub = expense_parser.add_subparsers(dest="command", required=True)

    expense_add = expense_sub.add_parser("add", help="Add a new expense")
    expense_add.add_argument("name")
    expense_add.add_argument("amount", type=_parse_amount)
    expense_add.add_argument("--category")
    expense_add.add_argument("--date", type=_parse_date)
    expense_add.add_argument("--source")

    expense_sub.add_parser("list", help="List expenses, newest first")

    expense_delete = expense_sub.add_parser("delete", help="Delete an expense")
    expense_delete.add_argument("id")

    goal_parser = subparsers.add_parser("goal", help="Manage savings goals")
    goal_sub = goal_parser.add_subparsers(dest="command", required=True)

    goal_add = goal_sub.add_parser("add", help="Add a savings goal")
    goal_add.add_argument("name")
    goal_add.add_argument("target", type=_parse_amount)

    goal_sub.add_parser("list", help="Show goal progress")

    goal_contribute = goal_sub.add_parser("contribute", help="Contribute to a goal")
    goal_contribute.add_argument("id")
    goal_contribute.add_argument("amount", type=_parse_amount)

    threshold_parser = subparsers.add_parser("threshold", help="Set the low-balance threshold")
    threshold_parser.add_argument("value")

    summary_parser = subparsers.add_parser("summary", help="Show balance and recent expenses")
    summary_parser.add_argument("--recent", type=int, default=5)

    subparsers.add_parser("breakdown", help="Show spending by category")

    reset_parser = subparsers.add_parser("reset", help="Delete all income, expenses and goals")
    reset_parser.add_argument("--yes", action="store_true", help="Skip the confirmation check")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        service = _load_service(args.data_dir)
        if args.entity == "income":
            handle_income(args, service)
        elif args.entity == "expense":
            handle_expense(args, service)
        elif args.entity == "goal":
            handle_goal(args, service)
        elif args.entity == "threshold":
            handle_threshold(args, service)
        elif args.entity == "summary":
            handle_summary(args, service)
        elif args.entity == "breakdown":
            handle_breakdown(args, service)
        elif args.entity == "reset":
            if not args.yes:
                print("Refusing to reset without --yes.", file=sys.stderr)
                return 1
            service.reset()
            print("All data has been reset.")
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown entity: {args.entity}")
            return 2
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
