"""
Currency arithmetic for storefront amounts.

All storefront amounts are whole currency units. Percentages are applied
with a single half-up rounding step and the result is never re-rounded.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

CURRENCY_UNIT = Decimal('1')
HUNDRED = Decimal('100')

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artefacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid amount: {value!r}")


def round_to_unit(amount: Number) -> Decimal:
    """Round to the nearest whole currency unit, halves away from zero"""
    return to_decimal(amount).quantize(CURRENCY_UNIT, rounding=ROUND_HALF_UP)


def percent_of(amount: Number, percent: Number) -> Decimal:
    """Percentage of an amount, rounded once to the currency unit"""
    return round_to_unit(to_decimal(amount) * to_decimal(percent) / HUNDRED)


def format_amount(amount: Number, symbol: str = '₹') -> str:
    """Format an amount for display, e.g. ``₹1,416``"""
    value = to_decimal(amount)
    if value == value.to_integral_value():
        return f"{symbol}{int(value):,}"
    return f"{symbol}{value:,.2f}"
