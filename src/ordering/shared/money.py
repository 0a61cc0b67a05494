"""Money arithmetic helpers.

Amounts are stored as floats rounded to cents (like every other price field
in the model) but all arithmetic is done on ``Decimal`` so totals are exact.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def as_money(value) -> Decimal:
    """Convert a float/int/str/Decimal amount to a Decimal rounded to cents."""
    if isinstance(value, Decimal):
        amount = value
    else:
        # str() avoids binary float artefacts: Decimal(0.1) != Decimal("0.1")
        amount = Decimal(str(value))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    return as_money(as_money(unit_price) * quantity)


def total_of(lines) -> Decimal:
    """Sum ``(quantity, unit_price)`` pairs."""
    return sum((line_total(quantity, unit_price) for quantity, unit_price in lines), Decimal("0.00"))
