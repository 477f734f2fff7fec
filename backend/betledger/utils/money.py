from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_money(value: Decimal | float | int | None) -> Decimal:
    """Coerce a number (or a NULL aggregate) to Decimal; None becomes 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr of a float, e.g. 0.075 rather than its binary expansion
    return Decimal(str(value))


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
