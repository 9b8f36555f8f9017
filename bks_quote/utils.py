from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP


def to_decimal(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    if x is None:
        return Decimal(0)
    return Decimal(str(x))


def round_half_up(x) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_decimal(x).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def money(amount, symbol: str = "kr") -> str:
    """Format whole currency units the Swedish way, e.g. '12 345 kr'."""
    val = round_half_up(amount)
    sign = "-" if val < 0 else ""
    whole = "{:,}".format(abs(val)).replace(",", " ")
    return f"{sign}{whole} {symbol}"
