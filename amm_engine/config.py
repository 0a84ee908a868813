"""
Configuration loading and validation for the AMM pricing engine.
"""

import os
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import yaml

from .constants import (
    BISECTION_MAX_ITERATIONS,
    BISECTION_TOLERANCE,
    BRACKET_MULTIPLIER,
    DECIMAL_PRECISION,
    DEFAULT_SLIPPAGE,
    DISPLAY_PRECISION,
    ISSUED_PRECISION,
    MAX_FEE_RATE,
    NATIVE_CURRENCY,
    NATIVE_PRECISION,
)
from .exceptions import ConfigurationError

CONFIG_PATH_ENV = "AMM_ENGINE_CONFIG"
DEFAULT_SLIPPAGE_ENV = "AMM_ENGINE_DEFAULT_SLIPPAGE"


class ConfigError(ConfigurationError):
    """Raised when config is invalid or missing required fields."""

    pass


class EngineConfig:
    """
    Parsed and validated engine configuration.

    Attributes:
        decimal_precision: Significant digits used for internal arithmetic
        native_currency: Currency code of the ledger's native asset
        native_precision: Fractional digits for native-asset amounts
        issued_precision: Fractional digits for issued-asset amounts
        display_precision: Fractional digits for deposit/withdrawal amounts
        bisection_tolerance: Absolute LP-token tolerance of the deposit solver
        bisection_max_iterations: Iteration cap of the deposit solver
        bracket_multiplier: Seed multiplier for the solver's upper bound
        default_slippage: Slippage applied when a request does not carry one
        max_fee_rate: Largest trading fee accepted from ledger pool data
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Parse and validate config from dictionary.

        Args:
            config_dict: Loaded YAML config (all keys optional)

        Raises:
            ConfigError: If a field has the wrong type or is out of range
        """
        config_dict = config_dict or {}

        # Arithmetic and output precision
        self.decimal_precision: int = self._get_int(
            config_dict, "decimal_precision", DECIMAL_PRECISION, minimum=20
        )
        self.native_currency: str = str(config_dict.get("native_currency", NATIVE_CURRENCY))
        self.native_precision: int = self._get_int(
            config_dict, "native_precision", NATIVE_PRECISION, minimum=0
        )
        self.issued_precision: int = self._get_int(
            config_dict, "issued_precision", ISSUED_PRECISION, minimum=0
        )
        self.display_precision: int = self._get_int(
            config_dict, "display_precision", DISPLAY_PRECISION, minimum=0
        )

        # Single-asset deposit solver
        self.bisection_tolerance: Decimal = self._get_decimal(
            config_dict, "bisection_tolerance", BISECTION_TOLERANCE
        )
        self.bisection_max_iterations: int = self._get_int(
            config_dict, "bisection_max_iterations", BISECTION_MAX_ITERATIONS, minimum=1
        )
        self.bracket_multiplier: Decimal = self._get_decimal(
            config_dict, "bracket_multiplier", BRACKET_MULTIPLIER
        )
        if self.bisection_tolerance <= 0:
            raise ConfigError("bisection_tolerance must be greater than 0")
        if self.bracket_multiplier <= 0:
            raise ConfigError("bracket_multiplier must be greater than 0")

        # Quoting defaults
        self.default_slippage: Decimal = self._get_decimal(
            config_dict, "default_slippage", DEFAULT_SLIPPAGE
        )
        if self.default_slippage < 0:
            raise ConfigError("default_slippage must not be negative")

        self.max_fee_rate: Decimal = self._get_decimal(
            config_dict, "max_fee_rate", MAX_FEE_RATE
        )
        if not Decimal("0") <= self.max_fee_rate < Decimal("1"):
            raise ConfigError("max_fee_rate must be in [0, 1)")

        widest = max(self.native_precision, self.issued_precision, self.display_precision)
        if widest >= self.decimal_precision:
            raise ConfigError(
                f"decimal_precision ({self.decimal_precision}) must exceed "
                f"output precision ({widest})"
            )

    @staticmethod
    def _get_int(d: Dict, key: str, default: int, minimum: int) -> int:
        """Get optional integer field with lower-bound validation."""
        val = d.get(key, default)
        if isinstance(val, bool) or not isinstance(val, int):
            raise ConfigError(
                f"Config field '{key}' must be int, got {type(val).__name__}"
            )
        if val < minimum:
            raise ConfigError(f"Config field '{key}' must be at least {minimum}, got {val}")
        return val

    @staticmethod
    def _get_decimal(d: Dict, key: str, default: Decimal) -> Decimal:
        """Get optional numeric field as Decimal (parsed via str to avoid float noise)."""
        val = d.get(key, default)
        if isinstance(val, bool):
            raise ConfigError(f"Config field '{key}' must be numeric, got bool")
        try:
            result = Decimal(str(val))
        except InvalidOperation:
            raise ConfigError(f"Config field '{key}' must be numeric, got {val!r}") from None
        if not result.is_finite():
            raise ConfigError(f"Config field '{key}' must be finite, got {val!r}")
        return result

    def precision_for(self, currency: Optional[str]) -> int:
        """Fractional digits for amounts of `currency`."""
        if currency is not None and currency.upper() == self.native_currency.upper():
            return self.native_precision
        return self.issued_precision

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (Decimals as strings) for logging."""
        return {
            "decimal_precision": self.decimal_precision,
            "native_currency": self.native_currency,
            "native_precision": self.native_precision,
            "issued_precision": self.issued_precision,
            "display_precision": self.display_precision,
            "bisection_tolerance": str(self.bisection_tolerance),
            "bisection_max_iterations": self.bisection_max_iterations,
            "bracket_multiplier": str(self.bracket_multiplier),
            "default_slippage": str(self.default_slippage),
            "max_fee_rate": str(self.max_fee_rate),
        }


def load_config(config_path: str) -> EngineConfig:
    """
    Load and validate config from YAML file.

    Args:
        config_path: Path to config YAML file

    Returns:
        Validated EngineConfig instance

    Raises:
        ConfigError: If config invalid, unparsable or file not found
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError("Config file must contain a YAML dictionary")

    return EngineConfig(config_dict)


def load_config_from_env() -> EngineConfig:
    """
    Build config from the environment.

    AMM_ENGINE_CONFIG names a YAML file (defaults apply when unset);
    AMM_ENGINE_DEFAULT_SLIPPAGE overrides default_slippage.
    """
    config_path = os.getenv(CONFIG_PATH_ENV)
    if config_path:
        config = load_config(config_path)
        config_dict = config.to_dict()
    else:
        config_dict = {}

    slippage_override = os.getenv(DEFAULT_SLIPPAGE_ENV)
    if slippage_override:
        config_dict["default_slippage"] = slippage_override

    return EngineConfig(config_dict)
