from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from splitpay.models import Debt, ViewerSummary
from splitpay.services.validation import normalize_address


def project(debts: Iterable[Debt], viewer: str) -> ViewerSummary:
    me = normalize_address(viewer)
    owes = Decimal(0)
    is_owed = Decimal(0)
    for debt in debts:
        if normalize_address(debt.from_address) == me:
            owes += debt.amount
        if normalize_address(debt.to_address) == me:
            is_owed += debt.amount
    return ViewerSummary(owes=owes, is_owed=is_owed)
