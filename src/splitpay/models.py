from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Sequence


class ExpenseStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    DISPUTED = "disputed"
    CANCELLED = "cancelled"


@dataclass(slots=True, frozen=True)
class Expense:
    amount: Decimal
    paid_by: str
    status: ExpenseStatus = ExpenseStatus.ACTIVE
    id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class Payment:
    amount: Decimal
    from_address: str
    to_address: str
    status: PaymentStatus = PaymentStatus.PENDING
    id: Optional[str] = None
    transaction_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    notes: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Debt:
    from_address: str
    to_address: str
    amount: Decimal


@dataclass(slots=True, frozen=True)
class ViewerSummary:
    owes: Decimal
    is_owed: Decimal


@dataclass(slots=True, frozen=True)
class GroupSnapshot:
    """Read-only view of one group handed to the core by its store."""

    participants: Sequence[str]
    expenses: Sequence[Expense] = ()
    payments: Sequence[Payment] = ()
    group_id: Optional[str] = None
    name: Optional[str] = None
    participant_names: Mapping[str, str] = field(default_factory=dict)
