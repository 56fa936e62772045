import unittest
from types import SimpleNamespace

from app.core.constants import TransactionType
from app.core.stock_rules import is_low_stock, reversal_delta, signed_delta
from app.models.inventory import Inventory
from app.services.stock_ledger import StockLedger


class StockRulesTest(unittest.TestCase):
    def test_direction_policy(self):
        cases = [
            (TransactionType.PURCHASE, 7),
            (TransactionType.ADJUSTMENT, 7),
            (TransactionType.RETURN, 7),
            (TransactionType.SALE, -7),
        ]
        for transaction_type, expected in cases:
            with self.subTest(type=transaction_type):
                self.assertEqual(signed_delta(transaction_type, 7), expected)
                self.assertEqual(reversal_delta(transaction_type, 7), -expected)

    def test_accepts_plain_string_types(self):
        self.assertEqual(signed_delta("sale", 2), -2)

    def test_low_stock_boundaries(self):
        cases = [
            (0, 0, False),
            (5, 0, False),
            (4, 5, True),
            (5, 5, True),
            (6, 5, False),
        ]
        for current, minimum, expected in cases:
            with self.subTest(current=current, minimum=minimum):
                row = SimpleNamespace(current_stock=current, minimum_stock=minimum)
                self.assertEqual(is_low_stock(row), expected)

    def test_inventory_model_exposes_low_stock(self):
        self.assertTrue(Inventory(current_stock=2, minimum_stock=3).is_low_stock)
        self.assertFalse(Inventory(current_stock=2, minimum_stock=0).is_low_stock)
        self.assertTrue(StockLedger.is_low_stock(Inventory(current_stock=0, minimum_stock=1)))


if __name__ == "__main__":
    unittest.main()
