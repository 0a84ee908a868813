"""
Pool snapshot construction from ledger data.

Converts the ledger's pool-info payload (amounts, LP token, trading fee
units) into the Decimal snapshots the calculators consume.
"""

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import (
    DROPS_PER_NATIVE,
    FEE_UNIT,
    MAX_FEE_RATE,
    MAX_FEE_UNITS,
    NATIVE_CURRENCY,
    POOL_WEIGHT,
)
from .exceptions import InvalidInputError
from .types import LiquidityPool, SwapPool
from .utils import get_logger, to_decimal, to_positive_decimal

logger = get_logger(__name__)


def fee_units_to_rate(units) -> Decimal:
    """
    Convert ledger trading-fee units to a decimal fraction.

    1 unit = 0.001% (0.00001); the ledger caps fees at 1000 units (1%).

    Example:
        >>> fee_units_to_rate(500)
        Decimal('0.00500')
    """
    units = to_decimal(units, "trading_fee")
    if units < 0 or units > MAX_FEE_UNITS:
        raise InvalidInputError(
            f"trading_fee must be between 0 and {MAX_FEE_UNITS} units, got {units}",
            "trading_fee",
            units,
        )
    return units * FEE_UNIT


def parse_amount(amount: Any, field: str = "amount") -> Tuple[str, Optional[str], Decimal]:
    """
    Parse a ledger amount into (currency, issuer, value).

    Native amounts arrive as a string of drops and have no issuer; issued
    amounts as a mapping with `currency`, `issuer` and `value`.
    """
    if isinstance(amount, (str, int)) and not isinstance(amount, bool):
        drops = to_positive_decimal(amount, field)
        return NATIVE_CURRENCY, None, drops / DROPS_PER_NATIVE

    if isinstance(amount, Mapping):
        currency = amount.get("currency")
        if not currency:
            raise InvalidInputError(f"{field} is missing 'currency'", field, amount)
        value = to_positive_decimal(amount.get("value"), f"{field}.value")
        return currency, amount.get("issuer"), value

    raise InvalidInputError(f"{field} must be drops or a currency amount", field, amount)


def _asset_key(asset: Tuple[str, Optional[str], Decimal]) -> Tuple[str, str]:
    return asset[0], asset[1] or ""


def liquidity_pool_from_amm_info(
    info: Dict[str, Any], max_fee_rate: Decimal = MAX_FEE_RATE
) -> LiquidityPool:
    """
    Build a LiquidityPool from a ledger pool-info mapping.

    Expected keys: `amount`, `amount2`, `lp_token` (mapping with `value`)
    and `trading_fee` (fee units, defaults to 0). Assets are ordered by
    currency code, then issuer, so asset A sorts first.

    Raises:
        InvalidInputError: If the payload is malformed, both sides are the
            same asset, or the fee exceeds max_fee_rate
    """
    if not isinstance(info, Mapping):
        raise InvalidInputError("Pool info must be a mapping", "info", info)

    for key in ("amount", "amount2", "lp_token"):
        if key not in info:
            raise InvalidInputError(f"Pool info missing '{key}'", key)

    first = parse_amount(info["amount"], "amount")
    second = parse_amount(info["amount2"], "amount2")
    if _asset_key(first) == _asset_key(second):
        raise InvalidInputError(
            f"Pool assets must differ, got {first[0]} twice", "amount2", info["amount2"]
        )
    (asset_a, issuer_a, reserve_a), (asset_b, issuer_b, reserve_b) = sorted(
        [first, second], key=_asset_key
    )

    lp_token = info["lp_token"]
    if not isinstance(lp_token, Mapping):
        raise InvalidInputError("lp_token must be a currency amount", "lp_token", lp_token)
    lp_supply = to_positive_decimal(lp_token.get("value"), "lp_token.value")

    fee_rate = fee_units_to_rate(info.get("trading_fee", 0))
    if fee_rate > max_fee_rate:
        raise InvalidInputError(
            f"Trading fee {fee_rate} exceeds maximum {max_fee_rate}", "trading_fee", fee_rate
        )

    logger.debug(
        f"Pool snapshot: {reserve_a} {asset_a} / {reserve_b} {asset_b}, "
        f"LP supply {lp_supply}, fee {fee_rate}"
    )

    return LiquidityPool(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        lp_token_supply=lp_supply,
        fee_rate=fee_rate,
        weight=POOL_WEIGHT,
        asset_a=asset_a,
        asset_b=asset_b,
        issuer_a=issuer_a,
        issuer_b=issuer_b,
    )


def swap_pool_for(
    pool: LiquidityPool, currency_in: str, issuer_in: Optional[str] = None
) -> SwapPool:
    """
    Orient a liquidity pool for a swap that sends `currency_in`.

    `issuer_in` is only needed when both pool assets share a currency code.

    Raises:
        InvalidInputError: If the sent asset is not in the pool or is ambiguous
    """
    side_a = currency_in == pool.asset_a and issuer_in in (None, pool.issuer_a)
    side_b = currency_in == pool.asset_b and issuer_in in (None, pool.issuer_b)

    if side_a and side_b:
        raise InvalidInputError(
            f"Both pool assets are {currency_in}; pass issuer_in to choose one",
            "issuer_in",
            issuer_in,
        )
    if side_a:
        return SwapPool(
            reserve_in=pool.reserve_a,
            reserve_out=pool.reserve_b,
            fee_rate=pool.fee_rate,
            currency_in=pool.asset_a,
            currency_out=pool.asset_b,
        )
    if side_b:
        return SwapPool(
            reserve_in=pool.reserve_b,
            reserve_out=pool.reserve_a,
            fee_rate=pool.fee_rate,
            currency_in=pool.asset_b,
            currency_out=pool.asset_a,
        )
    raise InvalidInputError(
        f"Currency {currency_in} is not in pool {pool.asset_a}/{pool.asset_b}",
        "currency_in",
        currency_in,
    )
