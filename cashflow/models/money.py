"""
Money helpers.

All amounts are Decimal. Folds accumulate at full precision and only
presentation rounds to cents.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a raw amount to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    return Decimal(value)


def to_money(value: Number, places: int = 2) -> Decimal:
    """Round to currency precision (half up, as printed on a BAS)."""
    exponent = CENT if places == 2 else Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
