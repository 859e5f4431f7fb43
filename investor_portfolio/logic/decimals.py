"""Decimal helpers shared by the valuation logic.

Amounts coming out of the store may be ``None``, ``int``, ``float`` or
``Decimal``; everything is normalised to ``Decimal`` before any arithmetic.
"""
from decimal import Decimal
from typing import Any, Optional

ZERO = Decimal(0)
ONE = Decimal(1)
HUNDRED = Decimal(100)

def to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the shortest repr instead of the binary expansion
        return Decimal(str(value))
    return Decimal(value)

def safe_divide(numerator: Decimal, denominator: Decimal, default: Decimal = ZERO) -> Decimal:
    if denominator > 0:
        return numerator / denominator
    return default

def return_percent(current_value: Decimal, invested: Decimal) -> Decimal:
    return safe_divide(current_value - invested, invested) * HUNDRED

def share_percent(amount: Decimal, total: Decimal) -> Decimal:
    return safe_divide(amount, total) * HUNDRED

def as_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None
