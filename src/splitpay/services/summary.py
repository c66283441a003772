from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from splitpay.models import Debt, ExpenseStatus, GroupSnapshot
from splitpay.money import format_amount
from splitpay.services.balances import compute_balances
from splitpay.services.projection import project
from splitpay.services.settlement import settle
from splitpay.services.validation import normalize_address


@dataclass(slots=True)
class GroupSummary:
    viewer: str
    balances: dict[str, Decimal]
    debts: list[Debt]
    owes: Decimal
    is_owed: Decimal
    total_spent: Decimal
    name: Optional[str] = None
    group_id: Optional[str] = None
    participant_names: Mapping[str, str] = field(default_factory=dict)

    @property
    def settled(self) -> bool:
        return not self.debts


def summarize(snapshot: GroupSnapshot, viewer: str) -> GroupSummary:
    balances = compute_balances(snapshot.participants, snapshot.expenses, snapshot.payments)
    debts = settle(balances)
    projection = project(debts, viewer)
    total_spent = sum(
        (expense.amount for expense in snapshot.expenses if expense.status == ExpenseStatus.ACTIVE),
        Decimal(0),
    )
    return GroupSummary(
        viewer=viewer,
        balances=balances,
        debts=debts,
        owes=projection.owes,
        is_owed=projection.is_owed,
        total_spent=total_spent,
        name=snapshot.name,
        group_id=snapshot.group_id,
        participant_names=dict(snapshot.participant_names),
    )


def short_address(address: str) -> str:
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def display_name(address: str, names: Optional[Mapping[str, str]] = None) -> str:
    if names:
        lookup = {normalize_address(key): value for key, value in names.items()}
        name = lookup.get(normalize_address(address))
        if name:
            return name
    return short_address(address)


def format_summary(summary: GroupSummary, names: Optional[Mapping[str, str]] = None) -> str:
    names = summary.participant_names if names is None else names
    lines = [summary.name] if summary.name else []
    lines.append(f"Total spent: {format_amount(summary.total_spent)}")
    if summary.settled:
        lines.append("All settled")
    for debt in summary.debts:
        lines.append(
            f"{display_name(debt.from_address, names)} -> {display_name(debt.to_address, names)}: "
            f"{format_amount(debt.amount)}"
        )
    lines.append(f"You owe: {format_amount(summary.owes)}")
    lines.append(f"You are owed: {format_amount(summary.is_owed)}")
    return "\n".join(lines)
