"""Conversion between Decimal amounts and integer minor units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional

from splitpay.config import get_settings


def _decimals(decimals: Optional[int]) -> int:
    return get_settings().currency_decimals if decimals is None else decimals


def to_minor(amount: Decimal | int | str, decimals: Optional[int] = None) -> int:
    """Convert an amount to integer minor units.

    Raises ValueError when the amount is not a finite number or carries more
    fractional digits than the currency has.
    """
    places = _decimals(decimals)
    try:
        value = Decimal(amount) if not isinstance(amount, Decimal) else amount
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"not a number: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"not a finite amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + places + 1)
        scaled = value.scaleb(places)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{amount} has more than {places} fractional digits")
        return int(scaled)


def from_minor(minor: int, decimals: Optional[int] = None) -> Decimal:
    places = _decimals(decimals)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(abs(minor))) + places + 1)
        return Decimal(minor).scaleb(-places).quantize(Decimal(1).scaleb(-places))


def format_amount(amount: Decimal, currency: Optional[str] = None) -> str:
    label = get_settings().currency if currency is None else currency
    text = f"{amount.quantize(Decimal('0.01')):,}"
    return f"{text} {label}" if label else text
