from __future__ import annotations

from decimal import Decimal

MoneyLike = str | Decimal

_MONEY_Q = Decimal("0.01")


def quantize_money(value: Decimal, places: MoneyLike = _MONEY_Q) -> Decimal:
    """Quantize monetary values consistently across the codebase."""
    quant = Decimal(places)
    return value.quantize(quant)


def sum_money(values) -> Decimal:
    """Sum Decimals starting from an exact zero (never the int 0)."""
    return sum(values, Decimal("0"))
