from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


def to_cents(value) -> Decimal:
    """Coerce a database or user value to a Decimal rounded half-up to cents."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        # str() keeps floats coming back from SQLite from dragging binary noise along
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return to_cents(to_cents(unit_price) * quantity)
