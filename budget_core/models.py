"""Data models for the budget tracker ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Tuple

__all__ = [
    "DEFAULT_ALERT_THRESHOLD",
    "GOAL_CONTRIBUTION_CATEGORY",
    "GOAL_CONTRIBUTION_SOURCE",
    "ExpenseRecord",
    "Goal",
    "IncomeRecord",
    "LedgerDocument",
    "Settings",
    "format_amount",
    "parse_date",
    "parse_decimal",
]

DEFAULT_ALERT_THRESHOLD = Decimal("100.00")
GOAL_CONTRIBUTION_CATEGORY = "Goal Contribution"
GOAL_CONTRIBUTION_SOURCE = "Transfer"
CENT = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Render a monetary amount with exactly two fraction digits."""
    return f"{amount.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def parse_decimal(raw: Any) -> Decimal:
    # str() first so JSON floats written by older clients keep their short form.
    return Decimal(str(raw))


def parse_date(value: Any) -> date:
    """Parse ``YYYY-MM-DD`` strings (or pass through ``date`` instances)."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _extra(data: Mapping[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in known}


@dataclass(frozen=True)
class IncomeRecord:
    id: str
    name: str
    amount: Decimal
    date: date
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("id", "name", "amount", "date")

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "amount": format_amount(self.amount),
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IncomeRecord":
        return cls(
            id=data["id"],
            name=data["name"],
            amount=parse_decimal(data["amount"]),
            date=parse_date(data["date"]),
            extra=_extra(data, cls._FIELDS),
        )


@dataclass(frozen=True)
class ExpenseRecord:
    id: str
    name: str
    amount: Decimal
    category: str
    date: date
    source: str
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("id", "name", "amount", "category", "date", "source")

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "amount": format_amount(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExpenseRecord":
        """Hydrate an ExpenseRecord from JSON-native data."""
        return cls(
            id=data["id"],
            name=data["name"],
            amount=parse_decimal(data["amount"]),
            category=data.get("category") or "",
            date=parse_date(data["date"]),
            source=data.get("source") or "",
            extra=_extra(data, cls._FIELDS),
        )


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target: Decimal
    current: Decimal = Decimal("0.00")
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("id", "name", "target", "current")

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "target": format_amount(self.target),
            "current": format_amount(self.current),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Goal":
        return cls(
            id=data["id"],
            name=data["name"],
            target=parse_decimal(data["target"]),
            current=parse_decimal(data.get("current", 0)),
            extra=_extra(data, cls._FIELDS),
        )


@dataclass(frozen=True)
class Settings:
    alert_threshold: Decimal = DEFAULT_ALERT_THRESHOLD
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "alertThreshold": format_amount(self.alert_threshold)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        raw = data.get("alertThreshold")
        return cls(
            alert_threshold=DEFAULT_ALERT_THRESHOLD if raw is None else parse_decimal(raw),
            extra=_extra(data, ("alertThreshold",)),
        )


@dataclass(frozen=True)
class LedgerDocument:
    """The whole persisted state: read and written as one unit."""

    income: Tuple[IncomeRecord, ...] = ()
    expenses: Tuple[ExpenseRecord, ...] = ()
    goals: Tuple[Goal, ...] = ()
    settings: Settings = field(default_factory=Settings)
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("income", "expenses", "goals", "settings")

    def find_goal(self, goal_id: str) -> Goal | None:
        return next((goal for goal in self.goals if goal.id == goal_id), None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the document to the persisted JSON shape."""
        return {
            **self.extra,
            "income": [record.to_dict() for record in self.income],
            "expenses": [record.to_dict() for record in self.expenses],
            "goals": [goal.to_dict() for goal in self.goals],
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LedgerDocument":
        """Hydrate a document; missing collections fall back to empty ones."""
        return cls(
            income=tuple(IncomeRecord.from_dict(item) for item in data.get("income") or []),
            expenses=tuple(ExpenseRecord.from_dict(item) for item in data.get("expenses") or []),
            goals=tuple(Goal.from_dict(item) for item in data.get("goals") or []),
            settings=Settings.from_dict(data.get("settings") or {}),
            extra=_extra(data, cls._FIELDS),
        )
