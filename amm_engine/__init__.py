"""
AMM Pricing & Liquidity Estimation Engine.

Swap quotes and liquidity deposit/withdrawal amounts for a 50/50
constant-product pool, computed in arbitrary-precision Decimal arithmetic
from a caller-supplied pool snapshot.
"""

from amm_engine.version import __version__

PROJECT_NAME = "amm-pricing-engine"
VERSION = __version__

from amm_engine.constants import DepositAsset, ErrorKind, QuoteKind
from amm_engine.deposit import (
    compute_lp_from_single_asset,
    quote_deposit,
    quote_proportional_deposit,
    quote_single_asset_deposit,
    solve_single_asset_deposit,
)
from amm_engine.engine import QuoteEngine
from amm_engine.exceptions import (
    AmmEngineError,
    CalculationInvalidError,
    ConfigurationError,
    InsufficientLiquidityError,
    InvalidInputError,
    UnsupportedWeightError,
)
from amm_engine.pool import fee_units_to_rate, liquidity_pool_from_amm_info, swap_pool_for
from amm_engine.swap import quote_exact_input, quote_exact_output, quote_swap
from amm_engine.types import (
    DepositRequest,
    ExactInputQuote,
    ExactOutputQuote,
    LiquidityPool,
    ProportionalDepositQuote,
    ProportionalWithdrawalQuote,
    SingleAssetDepositQuote,
    SwapPool,
    SwapQuoteRequest,
    WithdrawalRequest,
)
from amm_engine.withdraw import quote_proportional_withdrawal, quote_withdrawal

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DepositAsset",
    "ErrorKind",
    "QuoteKind",
    "QuoteEngine",
    "quote_exact_input",
    "quote_exact_output",
    "quote_swap",
    "quote_proportional_deposit",
    "quote_single_asset_deposit",
    "quote_deposit",
    "compute_lp_from_single_asset",
    "solve_single_asset_deposit",
    "quote_proportional_withdrawal",
    "quote_withdrawal",
    "fee_units_to_rate",
    "liquidity_pool_from_amm_info",
    "swap_pool_for",
    "SwapPool",
    "LiquidityPool",
    "SwapQuoteRequest",
    "DepositRequest",
    "WithdrawalRequest",
    "ExactInputQuote",
    "ExactOutputQuote",
    "ProportionalDepositQuote",
    "SingleAssetDepositQuote",
    "ProportionalWithdrawalQuote",
    "AmmEngineError",
    "ConfigurationError",
    "InvalidInputError",
    "InsufficientLiquidityError",
    "CalculationInvalidError",
    "UnsupportedWeightError",
]
