"""Tests for the exceptions module."""

from amm_engine.constants import ErrorKind
from amm_engine.exceptions import (
    AmmEngineError,
    CalculationInvalidError,
    ConfigurationError,
    InsufficientLiquidityError,
    InvalidInputError,
    UnsupportedWeightError,
)
from amm_engine.types import ExactOutputQuote


def test_base_exception():
    """Test the base exception class."""
    error = AmmEngineError("Test error")
    assert str(error) == "Test error"
    assert error.details == {}
    assert error.kind is None

    error_with_details = AmmEngineError("Test error", {"key": "value"})
    assert error_with_details.details == {"key": "value"}


def test_configuration_error():
    error = ConfigurationError("Config error", {"config_file": "engine.yaml"})
    assert str(error) == "Config error"
    assert error.details["config_file"] == "engine.yaml"
    assert isinstance(error, AmmEngineError)


def test_invalid_input_error():
    error = InvalidInputError("amount_in must be greater than 0", field="amount_in", value="-1")
    assert error.kind == ErrorKind.INVALID_INPUT
    assert error.field == "amount_in"
    assert error.value == "-1"
    assert isinstance(error, AmmEngineError)


def test_insufficient_liquidity_error():
    error = InsufficientLiquidityError("Insufficient liquidity", requested=1000, available=900)
    assert error.kind == ErrorKind.INSUFFICIENT_LIQUIDITY
    assert error.requested == 1000
    assert error.available == 900


def test_calculation_invalid_error():
    error = CalculationInvalidError("Calculated input amount is invalid")
    assert error.kind == ErrorKind.CALCULATION_INVALID
    assert isinstance(error, AmmEngineError)


def test_unsupported_weight_error():
    error = UnsupportedWeightError("Unsupported weight", weight="0.6")
    assert error.kind == ErrorKind.UNSUPPORTED_WEIGHT
    assert error.weight == "0.6"


def test_failed_result_from_exception():
    """Quote results carry the exception's kind and message."""
    result = ExactOutputQuote.failed(InsufficientLiquidityError("pool drained"))

    assert result.success is False
    assert result.error == ErrorKind.INSUFFICIENT_LIQUIDITY
    assert result.message == "pool drained"
    assert result.exact_input is None
