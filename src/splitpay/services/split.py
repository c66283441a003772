from __future__ import annotations

from typing import Iterable, Mapping, Sequence


def split_amount(amount_minor: int, participants: Sequence[str]) -> dict[str, int]:
    """Split an amount equally, handing leftover minor units out in participant order."""
    if amount_minor < 0:
        raise ValueError("amount_minor must be non-negative")
    if not participants:
        raise ValueError("participants must not be empty")

    base_share, remainder = divmod(amount_minor, len(participants))
    shares = [base_share + 1 if idx < remainder else base_share for idx in range(len(participants))]
    return dict(zip(participants, shares))


def expense_deltas(amount_minor: int, payer: str, participants: Sequence[str]) -> dict[str, int]:
    # payer is credited what they fronted beyond their own share
    shares = split_amount(amount_minor, participants)
    deltas = {participant: -share for participant, share in shares.items()}
    deltas[payer] = amount_minor - shares[payer]
    return deltas


def merge_deltas(deltas: Iterable[Mapping[str, int]], into: dict[str, int]) -> dict[str, int]:
    for delta in deltas:
        for participant, amount in delta.items():
            into[participant] = into.get(participant, 0) + amount
    return into
