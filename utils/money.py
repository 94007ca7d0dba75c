from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def parse_money(value) -> Decimal:
    """Parse a currency amount into a Decimal with two places (half-up).

    Strings may carry ``$``, thousands separators, or accounting-style
    parentheses for negatives. Floats go through ``str`` so ``19.99`` stays
    ``19.99`` rather than its binary expansion.
    """
    if value is None:
        raise ValueError("missing money value")

    if isinstance(value, bool):
        raise ValueError("invalid money value")

    if isinstance(value, (int, float, Decimal)):
        normalized = str(value)
    else:
        normalized = str(value).strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(
            Decimal("0.01"),
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    if not amount.is_finite():
        raise ValueError("invalid money value")

    return -amount if is_negative else amount


def to_cents(value) -> int:
    """Currency units -> integer cents."""
    return int(parse_money(value) * 100)


def round_cents(value: Decimal) -> int:
    """Round a fractional cent amount to the nearest whole cent, halves up."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_units(cents: int) -> float:
    return cents / 100


def check_two_places(value: Decimal) -> Decimal:
    """Reject amounts with more than two decimal places instead of rounding them."""
    if value != value.quantize(Decimal("0.01")):
        raise ValueError("Max 2 decimal places")
    return value
