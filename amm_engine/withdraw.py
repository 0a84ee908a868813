"""
Liquidity withdrawal quoting.

Redeeming LP tokens returns both assets in proportion to the share of the
supply burned. Amounts are rounded down: the quote must never promise more
than the pool pays out.
"""

from .constants import DECIMAL_PRECISION, DISPLAY_PRECISION
from .decimal_math import engine_context, round_down
from .exceptions import AmmEngineError, InsufficientLiquidityError
from .types import LiquidityPool, ProportionalWithdrawalQuote, WithdrawalRequest
from .utils import get_logger, to_positive_decimal

logger = get_logger(__name__)


def quote_proportional_withdrawal(
    reserve_a,
    reserve_b,
    lp_supply,
    lp_tokens_in,
    precision: int = DISPLAY_PRECISION,
    decimal_precision: int = DECIMAL_PRECISION,
) -> ProportionalWithdrawalQuote:
    """
    Assets received for burning `lp_tokens_in` of `lp_supply` LP tokens.

    Fails with INSUFFICIENT_LIQUIDITY when more LP tokens are redeemed than
    are outstanding.
    """
    try:
        with engine_context(decimal_precision):
            reserve_a = to_positive_decimal(reserve_a, "reserve_a")
            reserve_b = to_positive_decimal(reserve_b, "reserve_b")
            lp_supply = to_positive_decimal(lp_supply, "lp_supply")
            lp_tokens_in = to_positive_decimal(lp_tokens_in, "lp_tokens_in")

            if lp_tokens_in > lp_supply:
                raise InsufficientLiquidityError(
                    f"Cannot redeem {lp_tokens_in} LP tokens from a supply of {lp_supply}",
                    requested=lp_tokens_in,
                    available=lp_supply,
                )

            # Multiply before dividing so exact shares stay exact under round-down
            amount_a = round_down(reserve_a * lp_tokens_in / lp_supply, precision)
            amount_b = round_down(reserve_b * lp_tokens_in / lp_supply, precision)
    except AmmEngineError as e:
        logger.warning(f"Withdrawal quote rejected: {e}")
        return ProportionalWithdrawalQuote.failed(e)

    logger.debug(
        f"Proportional withdrawal: {lp_tokens_in} of {lp_supply} LP -> "
        f"{amount_a} A + {amount_b} B"
    )
    return ProportionalWithdrawalQuote(success=True, amount_a=amount_a, amount_b=amount_b)


def quote_withdrawal(
    pool: LiquidityPool,
    request: WithdrawalRequest,
    precision: int = DISPLAY_PRECISION,
    decimal_precision: int = DECIMAL_PRECISION,
) -> ProportionalWithdrawalQuote:
    """Quote a withdrawal request against a pool snapshot."""
    return quote_proportional_withdrawal(
        pool.reserve_a,
        pool.reserve_b,
        pool.lp_token_supply,
        request.lp_tokens_in,
        precision=precision,
        decimal_precision=decimal_precision,
    )
