from __future__ import annotations

import re
from decimal import Decimal
from typing import Collection, Iterable

from splitpay.config import get_settings
from splitpay.money import to_minor


ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
TRANSACTION_HASH_RE = re.compile(r"^0x[a-fA-F0-9]{64}$")


class InvalidInput(ValueError):
    pass


def normalize_address(address: str) -> str:
    if not isinstance(address, str) or not address.strip():
        raise InvalidInput("address must be a non-empty string")
    return address.strip().lower()


def is_valid_address(address: str) -> bool:
    return bool(ADDRESS_RE.match(address.strip()))


def is_valid_transaction_hash(value: str) -> bool:
    return bool(TRANSACTION_HASH_RE.match(value.strip()))


def is_valid_amount(amount: Decimal) -> bool:
    return Decimal(0) < amount <= get_settings().max_expense_amount


def ensure_positive(amount: Decimal, what: str) -> int:
    """Return the amount in minor units, rejecting non-positive or over-precise values."""
    try:
        minor = to_minor(amount)
    except ValueError as exc:
        raise InvalidInput(f"{what}: {exc}") from exc
    if minor <= 0:
        raise InvalidInput(f"{what}: amount must be positive, got {amount}")
    return minor


def ensure_member(address: str, members: Collection[str], what: str) -> str:
    key = normalize_address(address)
    if key not in members:
        raise InvalidInput(f"{what}: {address} is not a participant of the group")
    return key


def normalize_participants(participants: Iterable[str]) -> list[str]:
    keys: list[str] = []
    seen: set[str] = set()
    for participant in participants:
        key = normalize_address(participant)
        if key in seen:
            raise InvalidInput(f"duplicate participant: {participant}")
        seen.add(key)
        keys.append(key)
    if not keys:
        raise InvalidInput("a group needs at least one participant")
    return keys
