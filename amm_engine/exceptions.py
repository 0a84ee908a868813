"""
Exception hierarchy for the AMM pricing engine.

Calculators raise these internally; the public quote functions translate
them into failed quote results carrying the matching ErrorKind.
"""

from typing import Any, Dict, Optional

from .constants import ErrorKind


class AmmEngineError(Exception):
    """Base exception for all AMM engine errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(AmmEngineError):
    """Raised when engine configuration is missing or invalid."""

    pass


class InvalidInputError(AmmEngineError):
    """Raised for missing, non-numeric or out-of-range arguments."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class InsufficientLiquidityError(AmmEngineError):
    """Raised when a request would drain (or overdraw) a pool reserve."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY

    def __init__(
        self,
        message: str,
        requested: Optional[Any] = None,
        available: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.requested = requested
        self.available = available


class CalculationInvalidError(AmmEngineError):
    """Raised when a derived intermediate comes out non-positive."""

    kind = ErrorKind.CALCULATION_INVALID


class UnsupportedWeightError(AmmEngineError):
    """Raised when a pool weight other than 0.5 reaches the deposit solver."""

    kind = ErrorKind.UNSUPPORTED_WEIGHT

    def __init__(
        self,
        message: str,
        weight: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.weight = weight
