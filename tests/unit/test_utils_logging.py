"""Tests for logging helpers and logging_config."""

import logging

import pytest

from amm_engine import logging_config
from amm_engine.deposit import solve_single_asset_deposit
from amm_engine.swap import quote_exact_input, quote_exact_output
from amm_engine.utils import get_logger


@pytest.fixture
def restore_logging():
    """Put the root and package loggers back the way the test found them."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    logging.getLogger("amm_engine").setLevel(logging.NOTSET)


def test_get_logger_basic():
    """Test basic get_logger functionality."""
    logger = get_logger(__name__)
    assert isinstance(logger, logging.Logger)
    assert logger.name == __name__


def test_get_logger_with_level():
    logger = get_logger(__name__ + ".test1", level=logging.DEBUG)
    assert logger.level == logging.DEBUG


def test_module_loggers_inherit_package_level():
    """Package module loggers carry no level or handler of their own."""
    for name in ("amm_engine.swap", "amm_engine.deposit", "amm_engine.pool"):
        logger = logging.getLogger(name)
        assert logger.level == logging.NOTSET
        assert logger.handlers == []


def test_rejected_quote_logged_as_warning(caplog):
    """Failed quotes are reported at WARNING by the swap module."""
    with caplog.at_level(logging.WARNING, logger="amm_engine.swap"):
        quote = quote_exact_output("1000", "1000", "1000", "0", "0")

    assert not quote.success
    assert any(
        r.levelno == logging.WARNING and "Exact-output quote rejected" in r.getMessage()
        for r in caplog.records
    )


def test_setup_debug_emits_quote_details(restore_logging, capsys):
    logging_config.setup_debug()
    quote_exact_input("1000", "1000", "100", "0")
    solve_single_asset_deposit("1000", "1000", "0", "0.5", "10")

    out = capsys.readouterr().out
    assert logging.getLogger("amm_engine.swap").getEffectiveLevel() == logging.DEBUG
    assert "DEBUG" in out
    assert "amm_engine.swap" in out
    assert "Exact-input quote" in out
    assert "Deposit solver converged" in out


def test_setup_minimal_hides_debug(restore_logging, capsys):
    logging_config.setup_minimal()
    quote_exact_input("1000", "1000", "100", "0")

    assert logging.getLogger().level == logging.WARNING
    assert "Exact-input quote" not in capsys.readouterr().out


def test_setup_resets_module_levels(restore_logging, capsys):
    """A module logger pinned by the host is released by setup()."""
    swap_logger = logging.getLogger("amm_engine.swap")
    swap_logger.setLevel(logging.ERROR)

    logging_config.setup_debug()
    quote_exact_input("1000", "1000", "100", "0")

    assert swap_logger.level == logging.NOTSET
    assert "Exact-input quote" in capsys.readouterr().out
    assert len(logging.getLogger().handlers) == 1
