"""Internal constants shared across the library."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext

#: Jurisdiction whose fines count towards fines per capita.
REFERENCE_JURISDICTION = "PA"

#: Area codes are normalized to this many characters at ingestion.
AREA_CODE_LENGTH = 5

# ------------------------------------------------------------------
# Division scales (fractional digits kept, truncated toward zero)
# ------------------------------------------------------------------

FINES_PER_CAPITA_SCALE = 4
FINE_RATE_SCALE = 4
PROPERTY_AVERAGE_SCALE = 0
MARKET_VALUE_PER_CAPITA_SCALE = 0

NO_DATA_LINE = "No data."

_MIN_PRECISION = 28


def divide_truncated(dividend: Decimal, divisor: Decimal, scale: int) -> Decimal:
    """Divide keeping *scale* fractional digits, truncating toward zero.

    The working precision grows with the magnitude of the quotient so the
    intermediate result never rounds up before truncation.

    Raises :class:`decimal.DivisionByZero` (an ``ArithmeticError``) when
    *divisor* is zero; callers guard against that case.
    """
    exponent = Decimal(1).scaleb(-scale)
    with localcontext() as ctx:
        ctx.rounding = ROUND_DOWN
        magnitude = dividend.adjusted() - divisor.adjusted() if dividend else 0
        ctx.prec = max(_MIN_PRECISION, magnitude + scale + 3)
        return (dividend / divisor).quantize(exponent, rounding=ROUND_DOWN)


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation (never ``1E+3``)."""
    return format(value, "f")
