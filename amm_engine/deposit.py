"""
Liquidity deposit quoting.

Two-asset deposits keep the pool ratio and need no fee. Single-asset
deposits go through the ledger's LP-mint formula

    L = T * ((1 + (B - F * (1 - W) * B) / P) ** W - 1)

where B is the amount deposited, P the pool reserve of that asset, T the
outstanding LP tokens, F the trading fee and W the pool weight. The formula
maps B -> L; the inverse B(L) is found by bisection, which is valid because
L is monotonically increasing in B.
"""

from decimal import Decimal
from typing import Optional, Union

from .constants import (
    BISECTION_MAX_ITERATIONS,
    BISECTION_TOLERANCE,
    BRACKET_MULTIPLIER,
    DECIMAL_PRECISION,
    DISPLAY_PRECISION,
    MAX_BRACKET_EXPANSIONS,
    POOL_WEIGHT,
    DepositAsset,
)
from .decimal_math import (
    ONE,
    ZERO,
    apply_slippage,
    engine_context,
    round_half_even,
    round_up,
)
from .exceptions import (
    AmmEngineError,
    CalculationInvalidError,
    InvalidInputError,
    UnsupportedWeightError,
)
from .types import (
    DepositRequest,
    LiquidityPool,
    ProportionalDepositQuote,
    SingleAssetDepositQuote,
)
from .utils import (
    get_logger,
    to_decimal,
    to_fee_rate,
    to_non_negative_decimal,
    to_positive_decimal,
)

logger = get_logger(__name__)

TWO = Decimal("2")


# ============================================================================
# Two-asset deposit
# ============================================================================


def quote_proportional_deposit(
    reserve_a,
    reserve_b,
    lp_supply,
    desired_lp,
    precision: int = DISPLAY_PRECISION,
    decimal_precision: int = DECIMAL_PRECISION,
) -> ProportionalDepositQuote:
    """
    Amounts of both assets that mint `desired_lp` LP tokens at the current ratio.

    Example:
        >>> q = quote_proportional_deposit(1000, 2000, 1000, 10)
        >>> q.amount_a, q.amount_b
        (Decimal('10.000000'), Decimal('20.000000'))
    """
    try:
        with engine_context(decimal_precision):
            reserve_a = to_positive_decimal(reserve_a, "reserve_a")
            reserve_b = to_positive_decimal(reserve_b, "reserve_b")
            lp_supply = to_positive_decimal(lp_supply, "lp_supply")
            desired_lp = to_positive_decimal(desired_lp, "desired_lp")

            ratio = desired_lp / lp_supply
            amount_a = round_half_even(ratio * reserve_a, precision)
            amount_b = round_half_even(ratio * reserve_b, precision)
    except AmmEngineError as e:
        logger.warning(f"Proportional deposit quote rejected: {e}")
        return ProportionalDepositQuote.failed(e)

    logger.debug(
        f"Proportional deposit: {desired_lp} of {lp_supply} LP -> "
        f"{amount_a} A + {amount_b} B"
    )
    return ProportionalDepositQuote(success=True, amount_a=amount_a, amount_b=amount_b)


# ============================================================================
# Single-asset deposit
# ============================================================================


def _check_weight(weight) -> Decimal:
    weight = to_decimal(weight, "weight")
    if weight != POOL_WEIGHT:
        # Other weights need pow(base, W) instead of sqrt; not supported
        raise UnsupportedWeightError(
            f"Unsupported weight: {weight}. Only {POOL_WEIGHT} is supported.",
            weight=weight,
        )
    return weight


def compute_lp_from_single_asset(
    amount: Decimal,
    pool_reserve: Decimal,
    lp_supply: Decimal,
    fee_rate: Decimal,
    weight: Decimal = POOL_WEIGHT,
) -> Decimal:
    """
    LP tokens minted by depositing `amount` of one asset (forward formula).

    Runs in the caller's decimal context; wrap in engine_context() when
    calling directly.

    Raises:
        UnsupportedWeightError: If weight is not 0.5
    """
    weight = _check_weight(weight)

    fee_component = fee_rate * (ONE - weight) * amount
    base = ONE + (amount - fee_component) / pool_reserve
    return lp_supply * (base.sqrt() - ONE)


def solve_single_asset_deposit(
    pool_reserve,
    lp_supply,
    fee_rate,
    weight,
    desired_lp,
    tolerance: Decimal = BISECTION_TOLERANCE,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
    bracket_multiplier: Decimal = BRACKET_MULTIPLIER,
) -> Decimal:
    """
    Find the deposit amount B whose forward mint equals `desired_lp`.

    Bisects over [0, high] with high seeded at
    pool_reserve * (desired_lp / lp_supply) * bracket_multiplier, doubled
    until it brackets the target. Stops once |L(mid) - desired_lp| < tolerance
    or after `max_iterations` midpoints, whichever comes first.

    The tolerance is absolute in LP tokens. For targets near or below the
    tolerance, pass a proportionally smaller tolerance.

    Returns:
        Unrounded deposit amount

    Raises:
        InvalidInputError: For non-positive reserve, supply or target
        UnsupportedWeightError: If weight is not 0.5
        CalculationInvalidError: If no bracket could be established
    """
    weight = _check_weight(weight)
    pool_reserve = to_positive_decimal(pool_reserve, "pool_reserve")
    lp_supply = to_positive_decimal(lp_supply, "lp_supply")
    desired_lp = to_positive_decimal(desired_lp, "desired_lp")
    fee_rate = to_fee_rate(fee_rate)
    tolerance = to_positive_decimal(tolerance, "tolerance")
    if max_iterations < 1:
        raise InvalidInputError(
            f"max_iterations must be at least 1, got {max_iterations}",
            "max_iterations",
            max_iterations,
        )

    def forward(amount: Decimal) -> Decimal:
        return compute_lp_from_single_asset(amount, pool_reserve, lp_supply, fee_rate, weight)

    low = ZERO
    high = pool_reserve * (desired_lp / lp_supply) * to_decimal(bracket_multiplier)

    expansions = 0
    while forward(high) < desired_lp:
        if expansions >= MAX_BRACKET_EXPANSIONS:
            raise CalculationInvalidError(
                f"Could not bracket deposit for {desired_lp} LP tokens",
                {"high": str(high)},
            )
        high *= TWO
        expansions += 1

    mid = ZERO
    iterations = 0
    diff = -desired_lp
    for iterations in range(1, max_iterations + 1):
        mid = (low + high) / TWO
        diff = forward(mid) - desired_lp

        if abs(diff) < tolerance:
            break

        if diff < 0:
            low = mid
        else:
            high = mid

    if abs(diff) >= tolerance:
        logger.warning(
            f"Deposit solver stopped after {iterations} iterations "
            f"with residual {diff} (tolerance {tolerance})"
        )
    else:
        logger.debug(f"Deposit solver converged in {iterations} iterations: B={mid}")

    return mid


def quote_single_asset_deposit(
    reserve,
    lp_supply,
    fee_rate,
    weight,
    desired_lp,
    slippage=ZERO,
    precision: int = DISPLAY_PRECISION,
    tolerance: Decimal = BISECTION_TOLERANCE,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
    bracket_multiplier: Decimal = BRACKET_MULTIPLIER,
    decimal_precision: int = DECIMAL_PRECISION,
    deposit_asset: Optional[DepositAsset] = None,
) -> SingleAssetDepositQuote:
    """
    Amount of one asset to deposit for `desired_lp` LP tokens, plus a spending ceiling.

    The solved amount is rounded up: depositing less would mint fewer LP
    tokens than requested. The slippage ceiling is rounded up as well.

    Args:
        reserve: Pool reserve of the asset being deposited
        lp_supply: Outstanding LP tokens
        fee_rate: Trading fee as decimal
        weight: Pool weight (must be 0.5)
        desired_lp: LP tokens to mint
        slippage: Tolerance applied to the rounded amount (0.01 = 1%)
        precision: Fractional digits of the returned amounts

    Returns:
        SingleAssetDepositQuote; fails with UNSUPPORTED_WEIGHT or INVALID_INPUT
    """
    try:
        with engine_context(decimal_precision):
            slippage = to_non_negative_decimal(slippage, "slippage")
            solved = solve_single_asset_deposit(
                reserve,
                lp_supply,
                fee_rate,
                weight,
                desired_lp,
                tolerance=tolerance,
                max_iterations=max_iterations,
                bracket_multiplier=bracket_multiplier,
            )
            exact_amount = round_up(solved, precision)
            max_amount = round_up(apply_slippage(exact_amount, slippage), precision)
    except AmmEngineError as e:
        logger.warning(f"Single-asset deposit quote rejected: {e}")
        return SingleAssetDepositQuote.failed(e)

    logger.debug(
        f"Single-asset deposit: {desired_lp} LP -> {exact_amount} "
        f"(max {max_amount} with {slippage * 100}% slippage)"
    )
    return SingleAssetDepositQuote(
        success=True,
        deposit_asset=deposit_asset,
        exact_amount=exact_amount,
        max_amount_with_slippage=max_amount,
    )


def quote_deposit(
    pool: LiquidityPool,
    request: DepositRequest,
    precision: int = DISPLAY_PRECISION,
    tolerance: Decimal = BISECTION_TOLERANCE,
    max_iterations: int = BISECTION_MAX_ITERATIONS,
    bracket_multiplier: Decimal = BRACKET_MULTIPLIER,
    decimal_precision: int = DECIMAL_PRECISION,
) -> Union[ProportionalDepositQuote, SingleAssetDepositQuote]:
    """Quote a deposit request against a pool snapshot."""
    if request.deposit_asset == DepositAsset.BOTH:
        return quote_proportional_deposit(
            pool.reserve_a,
            pool.reserve_b,
            pool.lp_token_supply,
            request.desired_lp_tokens,
            precision=precision,
            decimal_precision=decimal_precision,
        )

    reserve = pool.reserve_a if request.deposit_asset == DepositAsset.A else pool.reserve_b
    return quote_single_asset_deposit(
        reserve,
        pool.lp_token_supply,
        pool.fee_rate,
        pool.weight,
        request.desired_lp_tokens,
        request.slippage,
        precision=precision,
        tolerance=tolerance,
        max_iterations=max_iterations,
        bracket_multiplier=bracket_multiplier,
        decimal_precision=decimal_precision,
        deposit_asset=request.deposit_asset,
    )
