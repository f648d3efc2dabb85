"""Validation helpers shared across ledger mutations."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from .exceptions import ValidationError
from .models import parse_date

NAME_MAX_LENGTH = 100
LABEL_MAX_LENGTH = 50


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _to_decimal(raw: object, field: str) -> Decimal:
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if raw is None:
        raise ValidationError(f"{field} is required")
    amount = _to_decimal(raw, field)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    amount = _quantize_two_decimals(amount)
    if amount <= 0:
        raise ValidationError(f"{field} must be at least 0.01")
    return amount


def parse_threshold(raw: object, field: str = "alert_threshold") -> Decimal:
    if raw is None:
        raise ValidationError(f"{field} is required")
    value = _to_decimal(raw, field)
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    return _quantize_two_decimals(value)


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_label(value: object, field: str, default: str) -> str:
    """Like ``validate_required_str`` but blank or missing input means ``default``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return validate_required_str(value, field, LABEL_MAX_LENGTH)


def validate_date(value: object, field: str, *, today: Optional[date] = None) -> date:
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string; missing means today."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return today or date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (date, str)):
        try:
            return parse_date(value)
        except ValueError as exc:
            raise ValidationError(f"{field} must be an ISO 8601 date (YYYY-MM-DD)") from exc
    raise ValidationError(f"{field} must be a date or ISO 8601 string")
