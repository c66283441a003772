from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from splitpay.logging import get_logger
from splitpay.models import Expense, ExpenseStatus, Payment, PaymentStatus
from splitpay.money import from_minor
from splitpay.services.settlement import SettlementError
from splitpay.services.split import expense_deltas, merge_deltas
from splitpay.services.validation import ensure_member, ensure_positive, normalize_participants


def compute_minor_balances(
    participants: Sequence[str],
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
) -> dict[str, int]:
    """Net balance of every participant in minor units, keyed as the caller spelled them.

    Every record is validated, including cancelled expenses and payments that are not
    completed, so a bad record never hides behind its status.
    """
    keys = normalize_participants(participants)
    members = set(keys)
    balances = {key: 0 for key in keys}

    per_expense: list[dict[str, int]] = []
    for expense in expenses:
        amount = ensure_positive(expense.amount, "expense")
        payer = ensure_member(expense.paid_by, members, "expense payer")
        if expense.status != ExpenseStatus.ACTIVE:
            continue
        per_expense.append(expense_deltas(amount, payer, keys))
    merge_deltas(per_expense, balances)

    for payment in payments:
        amount = ensure_positive(payment.amount, "payment")
        sender = ensure_member(payment.from_address, members, "payment sender")
        recipient = ensure_member(payment.to_address, members, "payment recipient")
        if payment.status != PaymentStatus.COMPLETED:
            continue
        balances[sender] += amount
        balances[recipient] -= amount

    total = sum(balances.values())
    if total != 0:
        get_logger(__name__).warning("balances.not_zero_sum", total_minor=total)
        raise SettlementError(f"balances do not sum to zero: {total} minor units left over")

    get_logger(__name__).debug("balances.computed", participants=len(keys))
    return {participant: balances[key] for participant, key in zip(participants, keys)}


def compute_balances(
    participants: Sequence[str],
    expenses: Iterable[Expense],
    payments: Iterable[Payment],
) -> dict[str, Decimal]:
    minor = compute_minor_balances(participants, expenses, payments)
    return {participant: from_minor(amount) for participant, amount in minor.items()}
