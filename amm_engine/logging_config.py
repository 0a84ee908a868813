"""
Logging configuration for applications embedding the engine.

Usage:
    from amm_engine import logging_config
    logging_config.setup()
"""

import logging
import sys


def setup(level=logging.INFO):
    """
    Configure the root logger with a short console format.

    - Uses HH:MM:SS timestamps
    - Quote calculations log at DEBUG, so INFO keeps per-quote noise out
    """
    root = logging.getLogger()
    root.setLevel(level)

    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
    )
    console.setFormatter(formatter)
    root.addHandler(console)

    logging.getLogger("amm_engine").setLevel(level)

    # Module loggers inherit from "amm_engine"
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("amm_engine.") and isinstance(logger, logging.Logger):
            logger.setLevel(logging.NOTSET)


def setup_minimal():
    """
    Only warnings and errors (rejected quotes, solver non-convergence).
    """
    setup(level=logging.WARNING)


def setup_debug():
    """
    Verbose logging: every quote's inputs and intermediate values.
    """
    setup(level=logging.DEBUG)
