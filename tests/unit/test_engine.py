"""
Unit tests for amm_engine/engine.py

Exercises the QuoteEngine facade end to end, from ledger pool info to
swap, deposit and withdrawal quotes.
"""

import unittest
from decimal import Decimal

from amm_engine import QuoteEngine
from amm_engine.config import EngineConfig
from amm_engine.constants import DepositAsset, ErrorKind
from amm_engine.exceptions import InvalidInputError
from amm_engine.pool import swap_pool_for
from amm_engine.types import (
    SingleAssetDepositQuote,
    SwapQuoteRequest,
    WithdrawalRequest,
)

AMM_INFO = {
    "amount": "1000000000",
    "amount2": {"currency": "USD", "issuer": "rIssuer", "value": "2000"},
    "lp_token": {"currency": "03ABCDEF", "issuer": "rAMM", "value": "1000"},
    "trading_fee": 0,
}


class TestQuoteEngine(unittest.TestCase):
    """Test QuoteEngine with default and custom configuration."""

    def setUp(self):
        self.engine = QuoteEngine()
        self.pool = self.engine.pool_from_amm_info(AMM_INFO)

    def test_pool_from_amm_info(self):
        self.assertEqual(self.pool.asset_a, "USD")
        self.assertEqual(self.pool.reserve_a, Decimal("2000"))
        self.assertEqual(self.pool.asset_b, "XRP")
        self.assertEqual(self.pool.reserve_b, Decimal("1000"))

    def test_fee_cap_from_config(self):
        engine = QuoteEngine(EngineConfig({"max_fee_rate": "0.001"}))
        with self.assertRaises(InvalidInputError):
            engine.pool_from_amm_info(dict(AMM_INFO, trading_fee=200))

    def test_exact_input_to_native_uses_native_precision(self):
        swap_pool = swap_pool_for(self.pool, "USD")
        quote = self.engine.quote_swap(swap_pool, SwapQuoteRequest.exact_input(Decimal("200")))

        # 1000 - 2000000 / 2200 = 90.909090...
        self.assertTrue(quote.success)
        self.assertEqual(quote.estimated_output, Decimal("90.909090"))

    def test_exact_output_from_issued_uses_issued_precision(self):
        swap_pool = swap_pool_for(self.pool, "USD")
        request = self.engine.exact_output_request(Decimal("100"))
        quote = self.engine.quote_swap(swap_pool, request)

        # 2000000 / 900 - 2000 = 222.222..., default slippage 1%
        self.assertTrue(quote.success)
        self.assertEqual(request.slippage, Decimal("0.01"))
        self.assertEqual(quote.exact_input, Decimal("222.222222222222222"))
        self.assertEqual(quote.input_with_slippage, Decimal("224.444444444444445"))

    def test_custom_precision(self):
        engine = QuoteEngine(EngineConfig({"issued_precision": 4}))
        swap_pool = swap_pool_for(self.pool, "XRP")
        quote = engine.quote_swap(swap_pool, SwapQuoteRequest.exact_input(Decimal("100")))

        # 2000 - 2000000 / 1100 = 181.8181...
        self.assertEqual(quote.estimated_output, Decimal("181.8181"))

    def test_drain_rejected(self):
        swap_pool = swap_pool_for(self.pool, "USD")
        quote = self.engine.quote_swap(
            swap_pool, SwapQuoteRequest.exact_output(Decimal("1000"), Decimal("0"))
        )
        self.assertEqual(quote.error, ErrorKind.INSUFFICIENT_LIQUIDITY)

    def test_deposit_both(self):
        request = self.engine.deposit_request(Decimal("10"), DepositAsset.BOTH)
        quote = self.engine.quote_deposit(self.pool, request)

        self.assertTrue(quote.success)
        self.assertEqual(quote.amount_a, Decimal("20"))
        self.assertEqual(quote.amount_b, Decimal("10"))

    def test_deposit_single_asset(self):
        request = self.engine.deposit_request(Decimal("10"), DepositAsset.B, Decimal("0.02"))
        quote = self.engine.quote_deposit(self.pool, request)

        self.assertIsInstance(quote, SingleAssetDepositQuote)
        self.assertTrue(quote.success)
        self.assertLess(abs(quote.exact_amount - Decimal("20.1")), Decimal("0.000002"))
        self.assertGreater(quote.max_amount_with_slippage, quote.exact_amount)
        self.assertLess(
            abs(quote.max_amount_with_slippage - quote.exact_amount * Decimal("1.02")),
            Decimal("0.00001"),
        )

    def test_solver_settings_from_config(self):
        """A loose tolerance and low iteration cap still produce a quote."""
        engine = QuoteEngine(
            EngineConfig({"bisection_tolerance": "0.01", "bisection_max_iterations": 5})
        )
        request = engine.deposit_request(Decimal("10"), DepositAsset.A, Decimal("0"))
        quote = engine.quote_deposit(self.pool, request)

        self.assertTrue(quote.success)
        self.assertGreater(quote.exact_amount, Decimal("0"))

    def test_withdrawal(self):
        quote = self.engine.quote_withdrawal(self.pool, WithdrawalRequest(Decimal("250")))

        self.assertTrue(quote.success)
        self.assertEqual(quote.amount_a, Decimal("500"))
        self.assertEqual(quote.amount_b, Decimal("250"))


if __name__ == "__main__":
    unittest.main()
