"""
Decimal arithmetic substrate shared by every calculator.

Conversion policy:
- Internal: Decimal with 50 significant digits, entered per call through
  engine_context() so each thread carries its own context
- Output: rounded once, at the final step, to the asset's precision
  (15 fractional digits for issued assets, 6 for the native asset)
- Amounts a user must send round up, amounts a user receives round down,
  everything else rounds half-even
"""

from decimal import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    localcontext,
)
from typing import Optional

from .constants import (
    DECIMAL_PRECISION,
    ISSUED_PRECISION,
    NATIVE_CURRENCY,
    NATIVE_PRECISION,
)

ONE = Decimal("1")
ZERO = Decimal("0")


def engine_context(precision: int = DECIMAL_PRECISION):
    """
    Return a context manager running the block under the engine's decimal context.

    Example:
        >>> with engine_context():
        ...     third = Decimal(1) / Decimal(3)
    """
    return localcontext(Context(prec=precision, rounding=ROUND_HALF_EVEN))


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def round_half_even(value: Decimal, places: int) -> Decimal:
    """Round to `places` fractional digits, ties to even."""
    return value.quantize(_quantum(places), rounding=ROUND_HALF_EVEN)


def round_up(value: Decimal, places: int) -> Decimal:
    """Round toward +infinity; used for amounts the user must be willing to send."""
    return value.quantize(_quantum(places), rounding=ROUND_CEILING)


def round_down(value: Decimal, places: int) -> Decimal:
    """Round toward -infinity; used for amounts the user will receive."""
    return value.quantize(_quantum(places), rounding=ROUND_FLOOR)


def precision_for_currency(
    currency: Optional[str],
    native_currency: str = NATIVE_CURRENCY,
    native_precision: int = NATIVE_PRECISION,
    issued_precision: int = ISSUED_PRECISION,
) -> int:
    """Fractional digits the ledger accepts for `currency`."""
    if currency is not None and currency.upper() == native_currency.upper():
        return native_precision
    return issued_precision


def apply_slippage(value: Decimal, slippage: Decimal) -> Decimal:
    """Inflate `value` by a slippage tolerance (0.01 = 1%)."""
    return value * (ONE + slippage)
