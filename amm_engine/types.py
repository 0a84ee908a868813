"""
Core value types for AMM quoting.

Pools, requests and results are frozen dataclasses created per call; none
of them is shared or mutated after construction.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .constants import POOL_WEIGHT, DepositAsset, ErrorKind, QuoteKind
from .exceptions import AmmEngineError


# ============================================================================
# Pool snapshots
# ============================================================================


@dataclass(frozen=True)
class SwapPool:
    """
    A pool oriented for a swap.

    Attributes:
        reserve_in: Reserve of the asset the user sends
        reserve_out: Reserve of the asset the user receives
        fee_rate: Trading fee as decimal (e.g., 0.003 for 0.3%)
        currency_in: Currency code sent (selects output precision)
        currency_out: Currency code received
    """

    reserve_in: Decimal
    reserve_out: Decimal
    fee_rate: Decimal = Decimal("0")
    currency_in: Optional[str] = None
    currency_out: Optional[str] = None


@dataclass(frozen=True)
class LiquidityPool:
    """
    A two-asset pool with its LP token supply.

    Attributes:
        reserve_a: Reserve of asset A
        reserve_b: Reserve of asset B
        lp_token_supply: Outstanding LP tokens
        fee_rate: Trading fee as decimal fraction (ledger allows 0 to 0.01)
        weight: Pool weight; only 0.5 is supported by the single-asset solver
        asset_a: Currency code of asset A
        asset_b: Currency code of asset B
        issuer_a: Issuer of asset A (None for the native asset)
        issuer_b: Issuer of asset B (None for the native asset)
    """

    reserve_a: Decimal
    reserve_b: Decimal
    lp_token_supply: Decimal
    fee_rate: Decimal = Decimal("0")
    weight: Decimal = POOL_WEIGHT
    asset_a: Optional[str] = None
    asset_b: Optional[str] = None
    issuer_a: Optional[str] = None
    issuer_b: Optional[str] = None


# ============================================================================
# Requests
# ============================================================================


@dataclass(frozen=True)
class SwapQuoteRequest:
    """A swap pinned by either the amount sent or the amount received."""

    kind: QuoteKind
    amount: Decimal
    slippage: Decimal = Decimal("0")

    @classmethod
    def exact_input(cls, amount_in) -> "SwapQuoteRequest":
        return cls(QuoteKind.EXACT_INPUT, amount_in)

    @classmethod
    def exact_output(cls, amount_out, slippage=Decimal("0")) -> "SwapQuoteRequest":
        return cls(QuoteKind.EXACT_OUTPUT, amount_out, slippage)


@dataclass(frozen=True)
class DepositRequest:
    """Mint `desired_lp_tokens` paying with asset A, asset B, or both."""

    desired_lp_tokens: Decimal
    deposit_asset: DepositAsset
    slippage: Decimal = Decimal("0")


@dataclass(frozen=True)
class WithdrawalRequest:
    """Redeem `lp_tokens_in` for both pool assets."""

    lp_tokens_in: Decimal


# ============================================================================
# Results
# ============================================================================


@dataclass(frozen=True)
class QuoteResult:
    """
    Base of every quote result.

    Callers must check `success` before reading amount fields; a failed
    result carries only `error` and `message`.
    """

    success: bool
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def failed(cls, exc: AmmEngineError):
        """Build a failed result of this type from an engine error."""
        return cls(success=False, error=exc.kind, message=str(exc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (Decimals as strings)."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, Enum):
                value = value.value
            result[f.name] = value
        return result


@dataclass(frozen=True)
class ExactInputQuote(QuoteResult):
    """Output estimate for a fixed input amount."""

    estimated_output: Optional[Decimal] = None
    fee_amount: Optional[Decimal] = None
    new_reserve_in: Optional[Decimal] = None
    new_reserve_out: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    price_impact: Optional[Decimal] = None

    @property
    def amount(self) -> Optional[Decimal]:
        return self.estimated_output


@dataclass(frozen=True)
class ExactOutputQuote(QuoteResult):
    """Input required (and spending ceiling) to receive a fixed output."""

    exact_input: Optional[Decimal] = None
    input_with_slippage: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    slippage_amount: Optional[Decimal] = None
    new_reserve_in: Optional[Decimal] = None
    new_reserve_out: Optional[Decimal] = None
    adjusted_output: Optional[Decimal] = None
    fee_adjustment: Optional[Decimal] = None

    @property
    def amount(self) -> Optional[Decimal]:
        return self.input_with_slippage


@dataclass(frozen=True)
class ProportionalDepositQuote(QuoteResult):
    """Both assets, in the pool's current ratio."""

    amount_a: Optional[Decimal] = None
    amount_b: Optional[Decimal] = None


@dataclass(frozen=True)
class SingleAssetDepositQuote(QuoteResult):
    """One asset; `max_amount_with_slippage` is the ceiling to authorize."""

    deposit_asset: Optional[DepositAsset] = None
    exact_amount: Optional[Decimal] = None
    max_amount_with_slippage: Optional[Decimal] = None


@dataclass(frozen=True)
class ProportionalWithdrawalQuote(QuoteResult):
    """Assets returned for redeeming LP tokens."""

    amount_a: Optional[Decimal] = None
    amount_b: Optional[Decimal] = None
