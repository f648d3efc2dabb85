from decimal import Decimal

from budget_core.alerts import AlertSession, AlertState, evaluate_alert
from budget_core.operations import add_expense, add_income, new_document, set_alert_threshold


def _with_balance(income, spent, threshold=100):
    doc = set_alert_threshold(new_document(), threshold)
    doc = add_income(doc, "Pay", income)
    if spent:
        doc = add_expense(doc, "Spend", spent)
    return doc


def test_normal_when_balance_at_threshold():
    result = evaluate_alert(_with_balance(100, 0), AlertSession())
    assert result.state is AlertState.NORMAL
    assert result.should_notify is False
    assert result.banner is None


def test_low_balance_notifies_once_per_session():
    doc = _with_balance(180, 100)
    session = AlertSession()

    first = evaluate_alert(doc, session)
    second = evaluate_alert(doc, session)

    assert first.state is AlertState.LOW_BALANCE
    assert first.should_notify is True
    assert first.notification == (
        "Your balance has dropped to $80.00, which is below your $100.00 threshold."
    )
    assert second.state is AlertState.LOW_BALANCE
    assert second.should_notify is False
    assert second.notification is None
    assert second.banner == "Warning: Your balance is below $100.00!"


def test_balance_dropping_from_150_to_50():
    session = AlertSession()
    doc = _with_balance(150, 0)
    notifications = [evaluate_alert(doc, session).should_notify]
    doc = add_expense(doc, "Bill", 100)
    for _ in range(3):
        notifications.append(evaluate_alert(doc, session).should_notify)
    assert notifications.count(True) == 1

    session.clear()
    assert evaluate_alert(doc, session).should_notify is True


def test_recovering_does_not_rearm_notification():
    session = AlertSession()
    low = _with_balance(50, 0)
    assert evaluate_alert(low, session).should_notify
    high = add_income(low, "Refund", 500)
    assert evaluate_alert(high, session).state is AlertState.NORMAL
    assert evaluate_alert(low, session).should_notify is False


def test_zero_threshold_only_alerts_when_negative():
    doc = _with_balance(10, 10, threshold=0)
    assert evaluate_alert(doc, AlertSession()).state is AlertState.NORMAL
    doc = add_expense(doc, "Overdraft", 1)
    result = evaluate_alert(doc, AlertSession())
    assert result.state is AlertState.LOW_BALANCE
    assert result.balance == Decimal("-1")
    assert result.to_dict()["state"] == "LowBalance"
