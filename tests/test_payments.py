from datetime import datetime, timezone
from decimal import Decimal

import pytest

from splitpay.config import get_settings
from splitpay.models import Debt, Expense, PaymentStatus
from splitpay.services.balances import compute_balances
from splitpay.services.payments import (
    InvalidTransition,
    cancel_payment,
    complete_payment,
    dispute_payment,
    request_payment,
)
from splitpay.services.settlement import settle
from splitpay.services.validation import InvalidInput

TX_HASH = "0x" + "ab12" * 16
NOW = datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc)


def _pending():
    debt = Debt(from_address="Bob", to_address="Alice", amount=Decimal("50"))
    return request_payment(debt, payment_id="p1", now=NOW)


def test_request_payment_mirrors_debt():
    payment = _pending()
    assert payment.status == PaymentStatus.PENDING
    assert (payment.from_address, payment.to_address, payment.amount) == ("Bob", "Alice", Decimal("50"))
    assert payment.created_at == NOW


def test_request_payment_rejects_self_payment():
    with pytest.raises(InvalidInput):
        request_payment(Debt(from_address="Bob", to_address="BOB", amount=Decimal("1")))


def test_complete_payment_records_proof():
    completed = complete_payment(_pending(), f"  {TX_HASH} ", "bob", now=NOW)
    assert completed.status == PaymentStatus.COMPLETED
    assert completed.transaction_hash == TX_HASH
    assert completed.completed_by == "bob"
    assert completed.completed_at == NOW


def test_completed_payment_settles_group():
    payment = complete_payment(request_payment(Debt("Bob", "Alice", Decimal("50"))), TX_HASH, "Bob")
    balances = compute_balances(["Alice", "Bob"], [Expense(amount=Decimal("100"), paid_by="Alice")], [payment])
    assert settle(balances) == []


@pytest.mark.parametrize("tx_hash", ["", "   ", "0x123", "ab12" * 16, "0x" + "zz" * 32])
def test_complete_payment_rejects_bad_hash(tx_hash):
    with pytest.raises(InvalidInput) as exc_info:
        complete_payment(_pending(), tx_hash, "Bob")
    assert not isinstance(exc_info.value, InvalidTransition)


def test_only_payer_can_complete():
    with pytest.raises(InvalidInput):
        complete_payment(_pending(), TX_HASH, "Alice")


def test_cancel_and_dispute_are_terminal():
    cancelled = cancel_payment(_pending())
    disputed = dispute_payment(_pending())
    assert cancelled.status == PaymentStatus.CANCELLED
    assert disputed.status == PaymentStatus.DISPUTED

    for payment in (cancelled, disputed):
        with pytest.raises(InvalidTransition):
            complete_payment(payment, TX_HASH, "Bob")
        with pytest.raises(InvalidTransition):
            cancel_payment(payment)


def test_completed_cannot_be_disputed():
    completed = complete_payment(_pending(), TX_HASH, "Bob")
    with pytest.raises(InvalidTransition):
        dispute_payment(completed)


def test_transitions_do_not_mutate():
    pending = _pending()
    cancel_payment(pending)
    assert pending.status == PaymentStatus.PENDING


def test_request_payment_respects_amount_cap(monkeypatch):
    assert request_payment(Debt("Bob", "Alice", Decimal("10000"))).amount == Decimal("10000")
    with pytest.raises(InvalidInput):
        request_payment(Debt("Bob", "Alice", Decimal("10000.01")))

    monkeypatch.setenv("SPLITPAY_MAX_EXPENSE_AMOUNT", "20000")
    get_settings.cache_clear()
    try:
        assert request_payment(Debt("Bob", "Alice", Decimal("15000"))).amount == Decimal("15000")
    finally:
        monkeypatch.delenv("SPLITPAY_MAX_EXPENSE_AMOUNT")
        get_settings.cache_clear()
