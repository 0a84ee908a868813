"""
Common helpers for the AMM pricing engine: module loggers and numeric
argument coercion.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from .exceptions import InvalidInputError


# Logging utilities
def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Get a module logger.

    Module loggers carry no handler and stay at NOTSET unless `level` is
    given, so they inherit the level and handlers configured on the
    "amm_engine" logger or the root logger (see logging_config.setup).

    Args:
        name: Logger name (typically __name__)
        level: Optional explicit logging level for this logger only

    Returns:
        The named logger
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


# Numeric utilities
def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Coerce a caller-supplied number into a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.

    Raises:
        InvalidInputError: If value is missing, boolean, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field} is required and must be numeric", field, value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInputError(
                f"{field} must be numeric, got {value!r}", field, value
            ) from None
    else:
        raise InvalidInputError(
            f"{field} must be numeric, got {type(value).__name__}", field, value
        )

    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}", field, value)

    return result


def to_positive_decimal(value: Any, field: str = "value") -> Decimal:
    """Coerce value to Decimal and require it to be strictly positive."""
    result = to_decimal(value, field)
    if result <= 0:
        raise InvalidInputError(f"{field} must be greater than 0, got {result}", field, value)
    return result


def to_non_negative_decimal(value: Any, field: str = "value") -> Decimal:
    """Coerce value to Decimal and require it to be zero or positive."""
    result = to_decimal(value, field)
    if result < 0:
        raise InvalidInputError(f"{field} must not be negative, got {result}", field, value)
    return result


def to_fee_rate(value: Any, field: str = "fee_rate") -> Decimal:
    """Coerce a trading fee fraction, which must lie in [0, 1)."""
    result = to_non_negative_decimal(value, field)
    if result >= 1:
        raise InvalidInputError(f"{field} must be less than 1, got {result}", field, value)
    return result
