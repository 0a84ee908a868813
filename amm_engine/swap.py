"""
Swap quoting against a constant-product pool.

Both directions use the invariant reserve_in * reserve_out = k, but the fee
sits on different legs:

- exact input: the fee is deducted from what the pool pays out
  (net = gross * (1 - fee))
- exact output: the requested amount is grossed up before it reaches the
  invariant (adjusted = desired / (1 - fee)), so the user nets exactly
  what they asked for

Either way the user nets exactly the quoted amount. Moving the fee to the
other leg in either function changes prices.
"""

from decimal import Decimal
from typing import Optional, Union

from .constants import DECIMAL_PRECISION, ISSUED_PRECISION, QuoteKind
from .decimal_math import (
    ONE,
    ZERO,
    apply_slippage,
    engine_context,
    precision_for_currency,
    round_down,
    round_half_even,
    round_up,
)
from .exceptions import (
    AmmEngineError,
    CalculationInvalidError,
    InsufficientLiquidityError,
)
from .types import ExactInputQuote, ExactOutputQuote, SwapPool, SwapQuoteRequest
from .utils import get_logger, to_fee_rate, to_non_negative_decimal, to_positive_decimal

logger = get_logger(__name__)


def quote_exact_input(
    reserve_in,
    reserve_out,
    amount_in,
    fee_rate=ZERO,
    precision: int = ISSUED_PRECISION,
    decimal_precision: int = DECIMAL_PRECISION,
) -> ExactInputQuote:
    """
    Estimate the output received for sending `amount_in`.

    Args:
        reserve_in: Pool reserve of the asset sent
        reserve_out: Pool reserve of the asset received
        amount_in: Amount sent
        fee_rate: Trading fee as decimal (0.003 = 0.3%)
        precision: Fractional digits of the returned amounts
        decimal_precision: Significant digits used internally

    Returns:
        ExactInputQuote; on failure `success` is False and `error` is set

    Example:
        >>> quote = quote_exact_input("1000", "1000", "100")
        >>> quote.estimated_output
        Decimal('90.909090909090909')
    """
    try:
        with engine_context(decimal_precision):
            return _exact_input(reserve_in, reserve_out, amount_in, fee_rate, precision)
    except AmmEngineError as e:
        logger.warning(f"Exact-input quote rejected: {e}")
        return ExactInputQuote.failed(e)


def _exact_input(reserve_in, reserve_out, amount_in, fee_rate, precision):
    reserve_in = to_positive_decimal(reserve_in, "reserve_in")
    reserve_out = to_positive_decimal(reserve_out, "reserve_out")
    amount_in = to_positive_decimal(amount_in, "amount_in")
    fee_rate = to_fee_rate(fee_rate)

    logger.debug(
        f"Exact-input quote: pool {reserve_in} (in) / {reserve_out} (out), "
        f"amount_in={amount_in}, fee={fee_rate * 100}%"
    )

    k = reserve_in * reserve_out
    new_reserve_in = reserve_in + amount_in
    new_reserve_out = k / new_reserve_in
    gross_output = reserve_out - new_reserve_out

    # Fee comes out of what the pool pays
    net_output = gross_output * (ONE - fee_rate)
    if net_output <= 0:
        raise CalculationInvalidError(
            f"Calculated output is invalid (zero or negative): {net_output}",
            {"amount_in": str(amount_in)},
        )

    # Impact relative to filling the whole order at the spot price
    no_impact_output = amount_in * reserve_out / reserve_in * (ONE - fee_rate)
    price_impact = max(ZERO, min(ONE - net_output / no_impact_output, ONE))

    estimated_output = round_down(net_output, precision)

    logger.debug(
        f"Exact-input result: gross={gross_output}, net={net_output}, "
        f"new pool {new_reserve_in} / {new_reserve_out}"
    )

    return ExactInputQuote(
        success=True,
        estimated_output=estimated_output,
        fee_amount=round_half_even(gross_output - net_output, precision),
        new_reserve_in=round_half_even(new_reserve_in, precision),
        new_reserve_out=round_half_even(new_reserve_out, precision),
        price_per_unit=round_half_even(amount_in / net_output, precision),
        price_impact=price_impact,
    )


def quote_exact_output(
    reserve_in,
    reserve_out,
    desired_output,
    slippage=ZERO,
    fee_rate=ZERO,
    precision: int = ISSUED_PRECISION,
    decimal_precision: int = DECIMAL_PRECISION,
) -> ExactOutputQuote:
    """
    Compute the input needed to receive `desired_output`, plus a spending ceiling.

    `input_with_slippage` is rounded up so the authorized amount never
    under-funds the swap.

    Args:
        reserve_in: Pool reserve of the asset sent
        reserve_out: Pool reserve of the asset received
        desired_output: Amount the user wants to net after the fee
        slippage: Tolerance added on top of the exact input (0.01 = 1%)
        fee_rate: Trading fee as decimal
        precision: Fractional digits of the returned amounts
        decimal_precision: Significant digits used internally

    Returns:
        ExactOutputQuote; fails with INSUFFICIENT_LIQUIDITY when the
        fee-adjusted output would drain the pool
    """
    try:
        with engine_context(decimal_precision):
            return _exact_output(
                reserve_in, reserve_out, desired_output, slippage, fee_rate, precision
            )
    except AmmEngineError as e:
        logger.warning(f"Exact-output quote rejected: {e}")
        return ExactOutputQuote.failed(e)


def _exact_output(reserve_in, reserve_out, desired_output, slippage, fee_rate, precision):
    reserve_in = to_positive_decimal(reserve_in, "reserve_in")
    reserve_out = to_positive_decimal(reserve_out, "reserve_out")
    desired_output = to_positive_decimal(desired_output, "desired_output")
    slippage = to_non_negative_decimal(slippage, "slippage")
    fee_rate = to_fee_rate(fee_rate)

    logger.debug(
        f"Exact-output quote: pool {reserve_in} (in) / {reserve_out} (out), "
        f"desired={desired_output}, slippage={slippage * 100}%, fee={fee_rate * 100}%"
    )

    # Request more than wanted so the fee leaves exactly desired_output
    adjusted_output = desired_output / (ONE - fee_rate)
    if adjusted_output >= reserve_out:
        raise InsufficientLiquidityError(
            f"Insufficient liquidity: cannot withdraw {adjusted_output} "
            f"from pool of {reserve_out}",
            requested=adjusted_output,
            available=reserve_out,
        )

    k = reserve_in * reserve_out
    new_reserve_out = reserve_out - adjusted_output
    new_reserve_in = k / new_reserve_out
    exact_input = new_reserve_in - reserve_in

    if exact_input <= 0:
        raise CalculationInvalidError(
            f"Calculated input amount is invalid (zero or negative): {exact_input}",
            {"desired_output": str(desired_output)},
        )

    rounded_exact = round_half_even(exact_input, precision)
    input_with_slippage = round_up(apply_slippage(exact_input, slippage), precision)

    logger.debug(
        f"Exact-output result: exact_input={rounded_exact}, "
        f"with slippage={input_with_slippage}, new pool {new_reserve_in} / {new_reserve_out}"
    )

    return ExactOutputQuote(
        success=True,
        exact_input=rounded_exact,
        input_with_slippage=input_with_slippage,
        price_per_unit=round_half_even(exact_input / desired_output, precision),
        slippage_amount=input_with_slippage - rounded_exact,
        new_reserve_in=round_half_even(new_reserve_in, precision),
        new_reserve_out=round_half_even(new_reserve_out, precision),
        adjusted_output=round_half_even(adjusted_output, precision),
        fee_adjustment=round_half_even(adjusted_output - desired_output, precision),
    )


def quote_swap(
    pool: SwapPool,
    request: SwapQuoteRequest,
    precision: Optional[int] = None,
    decimal_precision: int = DECIMAL_PRECISION,
) -> Union[ExactInputQuote, ExactOutputQuote]:
    """
    Quote a swap request against an oriented pool.

    Precision defaults to the ledger precision of the asset being quoted:
    the received currency for exact input, the sent currency for exact output.
    """
    if request.kind == QuoteKind.EXACT_INPUT:
        if precision is None:
            precision = precision_for_currency(pool.currency_out)
        return quote_exact_input(
            pool.reserve_in,
            pool.reserve_out,
            request.amount,
            pool.fee_rate,
            precision=precision,
            decimal_precision=decimal_precision,
        )

    if precision is None:
        precision = precision_for_currency(pool.currency_in)
    return quote_exact_output(
        pool.reserve_in,
        pool.reserve_out,
        request.amount,
        request.slippage,
        pool.fee_rate,
        precision=precision,
        decimal_precision=decimal_precision,
    )
