"""Version information for the AMM pricing engine."""

__version__ = "0.1.0"
