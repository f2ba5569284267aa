"""Decimal rounding helpers for monetary values

All monetary arithmetic uses Decimal with half-up rounding. Binary floats
never enter the money path.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
RATE_QUANTUM = Decimal("0.000001")
ZERO = Decimal("0.00")

# Accumulated payments are compared to invoice totals within this epsilon
PAYMENT_TOLERANCE = Decimal("0.01")

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without going through binary float repr"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    """Round to 2 decimal places, half-up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round6(value: Number) -> Decimal:
    """Round to 6 decimal places, half-up (exchange rates)"""
    return to_decimal(value).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
