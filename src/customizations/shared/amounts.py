"""Decimal helpers for monetary amounts and percentages carried as strings."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")

# Largest magnitude accepted for a configured amount
MAX_AMOUNT = Decimal("1000000000000000")


def to_decimal(value) -> Decimal:
    """Parse ``value`` into a finite ``Decimal``.

    Accepts ``Decimal``, ``int``, ``float`` and numeric strings. Booleans,
    blanks, non-numeric text, NaN and infinities raise ``ValueError``.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a decimal amount: {value!r}")

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal amount: {value!r}") from None
    else:
        raise ValueError(f"Not a decimal amount: {value!r}")

    if not number.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return number


def format_amount(value: Decimal) -> str:
    """Render an amount with exactly two fractional digits, rounding half up."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))
