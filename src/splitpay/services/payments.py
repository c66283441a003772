"""Payment lifecycle: pending payments either complete or end cancelled/disputed."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from splitpay.config import get_settings
from splitpay.logging import get_logger
from splitpay.models import Debt, Payment, PaymentStatus
from splitpay.services.validation import (
    InvalidInput,
    ensure_positive,
    is_valid_amount,
    is_valid_transaction_hash,
    normalize_address,
)


class InvalidTransition(InvalidInput):
    pass


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _transition(payment: Payment, target: PaymentStatus, **changes: object) -> Payment:
    if payment.status != PaymentStatus.PENDING:
        label = f"payment {payment.id}" if payment.id else "payment"
        raise InvalidTransition(f"{label} is {payment.status.value}, cannot mark it {target.value}")
    get_logger(__name__).debug(
        "payment.transition",
        payment_id=payment.id,
        from_status=payment.status.value,
        to_status=target.value,
    )
    return replace(payment, status=target, **changes)


def request_payment(
    debt: Debt,
    *,
    payment_id: Optional[str] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Payment:
    ensure_positive(debt.amount, "payment")
    if not is_valid_amount(debt.amount):
        raise InvalidInput(f"payment amount {debt.amount} is above the {get_settings().max_expense_amount} limit")
    if normalize_address(debt.from_address) == normalize_address(debt.to_address):
        raise InvalidInput("a payment needs two different participants")
    return Payment(
        amount=debt.amount,
        from_address=debt.from_address,
        to_address=debt.to_address,
        status=PaymentStatus.PENDING,
        id=payment_id,
        created_at=_now(now),
        notes=notes,
    )


def complete_payment(
    payment: Payment,
    transaction_hash: str,
    completed_by: str,
    *,
    now: Optional[datetime] = None,
) -> Payment:
    tx_hash = (transaction_hash or "").strip()
    if not tx_hash:
        raise InvalidInput("a transaction hash is required to complete a payment")
    if not is_valid_transaction_hash(tx_hash):
        raise InvalidInput(f"malformed transaction hash: {tx_hash}")
    if normalize_address(completed_by) != normalize_address(payment.from_address):
        raise InvalidInput("only the payer can mark a payment as completed")

    return _transition(
        payment,
        PaymentStatus.COMPLETED,
        transaction_hash=tx_hash,
        completed_by=completed_by,
        completed_at=_now(now),
    )


def cancel_payment(payment: Payment) -> Payment:
    return _transition(payment, PaymentStatus.CANCELLED)


def dispute_payment(payment: Payment) -> Payment:
    return _transition(payment, PaymentStatus.DISPUTED)
