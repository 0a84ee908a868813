"""
Constants and enums for the AMM pricing engine.

Centralizes error kinds, request kinds and the numeric defaults shared by
every calculator.
"""

from decimal import Decimal
from enum import Enum


class ErrorKind(Enum):
    """Reason a quote was rejected."""

    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    CALCULATION_INVALID = "calculation_invalid"
    UNSUPPORTED_WEIGHT = "unsupported_weight"


class QuoteKind(Enum):
    """Which leg of a swap the user pins."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


class DepositAsset(Enum):
    """Asset(s) a liquidity provider pays with."""

    A = "a"
    B = "b"
    BOTH = "both"


# Decimal context
DECIMAL_PRECISION = 50

# Output precision (fractional digits)
NATIVE_CURRENCY = "XRP"
NATIVE_PRECISION = 6
ISSUED_PRECISION = 15
DISPLAY_PRECISION = 6

# Ledger fee encoding: 1 unit = 0.001%, max 1000 units = 1%
FEE_UNIT = Decimal("0.00001")
MAX_FEE_UNITS = 1000
MAX_FEE_RATE = Decimal("0.01")

# Native amounts are reported in drops
DROPS_PER_NATIVE = Decimal("1000000")

# Only equal-weighted pools are supported
POOL_WEIGHT = Decimal("0.5")

# Single-asset deposit solver
BISECTION_TOLERANCE = Decimal("1e-8")
BISECTION_MAX_ITERATIONS = 100
BRACKET_MULTIPLIER = Decimal("10")
MAX_BRACKET_EXPANSIONS = 64

DEFAULT_SLIPPAGE = Decimal("0.01")
