"""
QuoteEngine: binds an EngineConfig to the stateless calculators.

The engine holds configuration only. Pool snapshots are passed in on every
call and never cached, so one instance can serve any number of threads.
"""

from typing import Any, Dict, Optional, Union

from .config import EngineConfig
from .constants import QuoteKind
from .deposit import quote_deposit
from .pool import liquidity_pool_from_amm_info
from .types import (
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
from .swap import quote_swap
from .utils import get_logger
from .withdraw import quote_withdrawal

logger = get_logger(__name__)


class QuoteEngine:
    """
    Configured entry point for swap, deposit and withdrawal quotes.

    Example:
        >>> engine = QuoteEngine()
        >>> pool = SwapPool(Decimal("1000"), Decimal("1000"))
        >>> engine.quote_swap(pool, SwapQuoteRequest.exact_input(Decimal("100")))
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        logger.debug(f"QuoteEngine configured: {self.config.to_dict()}")

    def pool_from_amm_info(self, info: Dict[str, Any]) -> LiquidityPool:
        """Build a pool snapshot from ledger pool info, enforcing the configured fee cap."""
        return liquidity_pool_from_amm_info(info, max_fee_rate=self.config.max_fee_rate)

    def quote_swap(
        self, pool: SwapPool, request: SwapQuoteRequest
    ) -> Union[ExactInputQuote, ExactOutputQuote]:
        """Quote a swap at the ledger precision of the quoted asset."""
        if request.kind == QuoteKind.EXACT_INPUT:
            precision = self.config.precision_for(pool.currency_out)
        else:
            precision = self.config.precision_for(pool.currency_in)
        return quote_swap(
            pool,
            request,
            precision=precision,
            decimal_precision=self.config.decimal_precision,
        )

    def exact_output_request(self, amount_out, slippage=None) -> SwapQuoteRequest:
        """Exact-output request, falling back to the configured default slippage."""
        if slippage is None:
            slippage = self.config.default_slippage
        return SwapQuoteRequest.exact_output(amount_out, slippage)

    def deposit_request(self, desired_lp_tokens, deposit_asset, slippage=None) -> DepositRequest:
        """Deposit request, falling back to the configured default slippage."""
        if slippage is None:
            slippage = self.config.default_slippage
        return DepositRequest(desired_lp_tokens, deposit_asset, slippage)

    def quote_deposit(
        self, pool: LiquidityPool, request: DepositRequest
    ) -> Union[ProportionalDepositQuote, SingleAssetDepositQuote]:
        """Quote a two-asset or single-asset deposit."""
        return quote_deposit(
            pool,
            request,
            precision=self.config.display_precision,
            tolerance=self.config.bisection_tolerance,
            max_iterations=self.config.bisection_max_iterations,
            bracket_multiplier=self.config.bracket_multiplier,
            decimal_precision=self.config.decimal_precision,
        )

    def quote_withdrawal(
        self, pool: LiquidityPool, request: WithdrawalRequest
    ) -> ProportionalWithdrawalQuote:
        """Quote a proportional LP-token withdrawal."""
        return quote_withdrawal(
            pool,
            request,
            precision=self.config.display_precision,
            decimal_precision=self.config.decimal_precision,
        )
