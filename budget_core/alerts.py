"""Low-balance alert evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .derivations import totals
from .models import LedgerDocument, format_amount


class AlertState(str, Enum):
    NORMAL = "Normal"
    LOW_BALANCE = "LowBalance"


class AlertSession:
    """Session-scoped memory of whether the interruptive alert already fired."""

    def __init__(self) -> None:
        self.alert_shown = False

    def clear(self) -> None:
        self.alert_shown = False


@dataclass(frozen=True)
class AlertResult:
    state: AlertState
    should_notify: bool
    balance: Decimal
    threshold: Decimal
    banner: Optional[str] = None
    notification: Optional[str] = None

    @property
    def is_low(self) -> bool:
        return self.state is AlertState.LOW_BALANCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "should_notify": self.should_notify,
            "balance": format_amount(self.balance),
            "threshold": format_amount(self.threshold),
            "banner": self.banner,
            "notification": self.notification,
        }


def alert_state(balance: Decimal, threshold: Decimal) -> AlertState:
    if balance < threshold:
        return AlertState.LOW_BALANCE
    return AlertState.NORMAL


def evaluate_alert(document: LedgerDocument, session: AlertSession) -> AlertResult:
    """Compare the balance to the configured threshold.

    The banner always reflects the current state. ``should_notify`` is only
    true the first time a low balance is seen in ``session``; evaluating
    marks the session so later calls stay quiet until the session is cleared.
    """
    balance = totals(document).current_balance
    threshold = document.settings.alert_threshold
    state = alert_state(balance, threshold)

    if state is AlertState.NORMAL:
        return AlertResult(state, False, balance, threshold)

    should_notify = not session.alert_shown
    if should_notify:
        session.alert_shown = True
    return AlertResult(
        state,
        should_notify,
        balance,
        threshold,
        banner=f"Warning: Your balance is below ${format_amount(threshold)}!",
        notification=(
            f"Your balance has dropped to ${format_amount(balance)}, "
            f"which is below your ${format_amount(threshold)} threshold."
        )
        if should_notify
        else None,
    )
