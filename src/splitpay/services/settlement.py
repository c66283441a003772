from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from typing import List, Mapping, Optional

from splitpay.config import get_settings
from splitpay.logging import get_logger
from splitpay.models import Debt
from splitpay.money import from_minor, to_minor
from splitpay.services.validation import InvalidInput, normalize_participants


class SettlementError(RuntimeError):
    """Balances that cannot be settled; always a bug upstream, never user error."""


@dataclass(slots=True)
class Transfer:
    from_address: str
    to_address: str
    amount_minor: int


def epsilon_minor(epsilon: Optional[Decimal] = None) -> int:
    settings = get_settings()
    value = settings.settlement_epsilon if epsilon is None else epsilon
    return int(value.scaleb(settings.currency_decimals).to_integral_value(rounding=ROUND_DOWN))


def settle_minor(balances: Mapping[str, int], epsilon: int = 0) -> List[Transfer]:
    """Greedy creditor/debtor matching over minor-unit balances.

    Both sides are ordered by descending amount, ties broken by ascending
    lower-cased address, so the result does not depend on mapping order.
    Matching is exact; transfers of at most ``epsilon`` are matched but not
    emitted. Input that leaves more than ``epsilon`` unmatched does not net
    to zero.
    """
    keys = dict(zip(balances, normalize_participants(balances))) if balances else {}

    creditors: list[tuple[str, int]] = []
    debtors: list[tuple[str, int]] = []

    for address, balance in balances.items():
        if balance > 0:
            creditors.append((address, balance))
        elif balance < 0:
            debtors.append((address, -balance))

    creditors.sort(key=lambda x: (-x[1], keys[x[0]]))
    debtors.sort(key=lambda x: (-x[1], keys[x[0]]))

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(creditors) and j < len(debtors):
        cred_address, cred_amount = creditors[i]
        debt_address, debt_amount = debtors[j]

        transfer_amount = min(cred_amount, debt_amount)
        if transfer_amount > epsilon:
            transfers.append(Transfer(from_address=debt_address, to_address=cred_address, amount_minor=transfer_amount))

        cred_amount -= transfer_amount
        debt_amount -= transfer_amount

        if cred_amount == 0:
            i += 1
        else:
            creditors[i] = (cred_address, cred_amount)

        if debt_amount == 0:
            j += 1
        else:
            debtors[j] = (debt_address, debt_amount)

    unmatched = creditors[i:] + debtors[j:]
    if sum(amount for _, amount in unmatched) > epsilon:
        get_logger(__name__).warning("settlement.unmatched", unmatched=[address for address, _ in unmatched])
        raise SettlementError(f"balances do not net to zero, unmatched: {unmatched}")

    return transfers


def settle(balances: Mapping[str, Decimal], epsilon: Optional[Decimal] = None) -> List[Debt]:
    try:
        minor = {address: to_minor(balance) for address, balance in balances.items()}
    except ValueError as exc:
        raise InvalidInput(f"balance: {exc}") from exc

    transfers = settle_minor(minor, epsilon_minor(epsilon))
    get_logger(__name__).debug("settlement.computed", debts=len(transfers))
    return [
        Debt(from_address=t.from_address, to_address=t.to_address, amount=from_minor(t.amount_minor))
        for t in transfers
    ]
