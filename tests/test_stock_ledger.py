import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from sqlalchemy import func, select

from app.core.constants import TransactionType
from app.core.dates import as_utc, utcnow
from app.core.result import ErrorKind, Result
from app.core.stock_rules import signed_delta
from app.database.base import Base
from app.database.engine import build_engine
from app.database.session import session_factory
from app.models import Category, Transaction, import_all_models
from app.services.inventory_store import SqlInventoryStore
from app.services.product_service import create_product
from app.services.stock_ledger import StockLedger, TransactionDraft, compute_total_amount
from app.services.transaction_store import SqlTransactionStore


class StockLedgerTestCase(unittest.TestCase):
    def setUp(self):
        import_all_models()
        self.engine = build_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        Session = session_factory(self.engine)
        self.db = Session()

        category = Category(name="Hardware")
        self.db.add(category)
        self.db.commit()
        self.product = create_product(
            self.db,
            {"name": "Hex Bolt M8", "sku": "HB-M8", "price": 0.4, "category_id": category.id},
        ).value

        self.inventory_store = SqlInventoryStore(self.db)
        self.ledger = StockLedger(self.inventory_store, SqlTransactionStore(self.db))

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def record(self, transaction_type, quantity, **extra):
        return self.ledger.record_transaction(
            TransactionDraft(
                product_id=self.product.id,
                type=transaction_type,
                quantity=quantity,
                **extra,
            )
        )

    def stock(self):
        return self.ledger.current_stock(self.product.id).value

    def transaction_count(self):
        return self.db.execute(select(func.count(Transaction.id))).scalar_one()


class RecordTransactionTest(StockLedgerTestCase):
    def test_purchase_sale_void_scenario(self):
        self.assertEqual(self.stock(), 0)

        purchase = self.record(TransactionType.PURCHASE, 20, unit_price=2)
        self.assertTrue(purchase.ok)
        self.assertEqual(self.stock(), 20)
        self.assertEqual(purchase.value.total_amount, 40)
        self.assertEqual(purchase.value.product.sku, "HB-M8")
        inventory = self.inventory_store.get_by_product(self.product.id).value
        self.assertIsNotNone(inventory.last_restocked_at)

        sale = self.record(TransactionType.SALE, 5)
        self.assertTrue(sale.ok)
        self.assertEqual(self.stock(), 15)

        voided = self.ledger.void_transaction(sale.value.id)
        self.assertTrue(voided.ok)
        self.assertEqual(self.stock(), 20)
        self.assertEqual(self.transaction_count(), 1)

    def test_sale_beyond_stock_is_rejected(self):
        self.record(TransactionType.PURCHASE, 3)

        result = self.record(TransactionType.SALE, 4)

        self.assertFalse(result.ok)
        self.assertEqual(result.error.kind, ErrorKind.INSUFFICIENT_STOCK)
        self.assertEqual(self.stock(), 3)
        self.assertEqual(self.transaction_count(), 1)

    def test_failed_stock_update_removes_transaction(self):
        rejected = Result.failure(ErrorKind.INSUFFICIENT_STOCK, "rejected by store")
        with patch.object(self.inventory_store, "apply_delta", return_value=rejected):
            result = self.record(TransactionType.PURCHASE, 10)

        self.assertFalse(result.ok)
        self.assertEqual(result.error.message, "rejected by store")
        self.assertEqual(self.transaction_count(), 0)
        self.assertEqual(self.stock(), 0)

    def test_store_exception_removes_transaction_and_propagates(self):
        with patch.object(
            self.inventory_store,
            "apply_delta",
            side_effect=RuntimeError("store unavailable"),
        ):
            with self.assertRaises(RuntimeError):
                self.record(TransactionType.PURCHASE, 10)

        self.assertEqual(self.transaction_count(), 0)
        self.assertEqual(self.stock(), 0)

    def test_unknown_product_is_not_found(self):
        result = self.ledger.record_transaction(
            TransactionDraft(product_id="missing", type=TransactionType.PURCHASE, quantity=1)
        )
        self.assertEqual(result.error.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(self.transaction_count(), 0)

    def test_invalid_quantity_and_type(self):
        self.assertEqual(
            self.record(TransactionType.PURCHASE, 0).error.kind, ErrorKind.INVALID_INPUT
        )
        self.assertEqual(self.record("transfer", 1).error.kind, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.transaction_count(), 0)

    def test_adjustment_and_return_add_stock(self):
        self.record(TransactionType.ADJUSTMENT, 4)
        self.record(TransactionType.RETURN, 2)
        self.assertEqual(self.stock(), 6)

    def test_total_amount_defaults(self):
        explicit = self.record(TransactionType.PURCHASE, 3, unit_price=2, total_amount=5)
        no_price = self.record(TransactionType.PURCHASE, 3)
        self.assertEqual(explicit.value.total_amount, 5)
        self.assertEqual(no_price.value.total_amount, 0)
        self.assertEqual(compute_total_amount(4, unit_price=2.5), 10.0)

    def test_restock_stamp_only_on_increase(self):
        started = utcnow()
        self.record(TransactionType.PURCHASE, 3)
        stamped = self.inventory_store.get_by_product(self.product.id).value.last_restocked_at
        self.assertGreaterEqual(as_utc(stamped), started)

        self.record(TransactionType.SALE, 1)
        after_sale = self.inventory_store.get_by_product(self.product.id).value.last_restocked_at
        self.assertEqual(as_utc(after_sale), as_utc(stamped))

    def test_stock_matches_signed_sum_over_sequence(self):
        steps = [
            ("record", TransactionType.PURCHASE, 10),
            ("record", TransactionType.SALE, 4),
            ("record", TransactionType.RETURN, 1),
            ("void", 1, None),
            ("record", TransactionType.ADJUSTMENT, 3),
            ("record", TransactionType.SALE, 7),
            ("void", 0, None),
            ("record", TransactionType.PURCHASE, 8),
        ]
        recorded = []
        for action, first, quantity in steps:
            if action == "record":
                result = self.record(first, quantity)
                if result.ok:
                    recorded.append(result.value)
            else:
                target = recorded[first]
                if self.ledger.void_transaction(target.id).ok:
                    recorded.remove(target)

            remaining = self.db.execute(select(Transaction)).scalars().all()
            expected = sum(signed_delta(row.type, row.quantity) for row in remaining)
            with self.subTest(step=(action, first, quantity)):
                self.assertEqual(self.stock(), expected)
                self.assertGreaterEqual(self.stock(), 0)


class VoidTransactionTest(StockLedgerTestCase):
    def test_void_restores_previous_stock(self):
        self.record(TransactionType.PURCHASE, 5)
        purchase = self.record(TransactionType.PURCHASE, 10).value
        self.assertEqual(self.stock(), 15)

        self.assertTrue(self.ledger.void_transaction(purchase.id).ok)

        self.assertEqual(self.stock(), 5)
        self.assertEqual(self.ledger.get_transaction(purchase.id).error.kind, ErrorKind.NOT_FOUND)

    def test_rejected_reversal_keeps_transaction(self):
        purchase = self.record(TransactionType.PURCHASE, 10).value
        self.record(TransactionType.SALE, 8)

        result = self.ledger.void_transaction(purchase.id)

        self.assertEqual(result.error.kind, ErrorKind.INSUFFICIENT_STOCK)
        self.assertIn("inventory constraints", result.error.message)
        self.assertTrue(self.ledger.get_transaction(purchase.id).ok)
        self.assertEqual(self.stock(), 2)

    def test_void_missing_transaction(self):
        result = self.ledger.void_transaction("does-not-exist")
        self.assertEqual(result.error.kind, ErrorKind.NOT_FOUND)

    def test_failed_delete_puts_stock_back(self):
        purchase = self.record(TransactionType.PURCHASE, 6).value
        gone = Result.failure(ErrorKind.NOT_FOUND, "already deleted")
        with patch.object(self.ledger._transactions, "delete", return_value=gone):
            result = self.ledger.void_transaction(purchase.id)

        self.assertEqual(result.error.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(self.stock(), 6)


class EditTransactionTest(StockLedgerTestCase):
    def setUp(self):
        super().setUp()
        self.purchase = self.record(TransactionType.PURCHASE, 10, unit_price=1.5).value

    def test_quantity_change_is_rejected(self):
        result = self.ledger.edit_transaction(self.purchase.id, {"quantity": 5})
        self.assertEqual(result.error.kind, ErrorKind.IMMUTABLE_FIELD)
        self.assertEqual(self.ledger.get_transaction(self.purchase.id).value.quantity, 10)

    def test_type_and_product_changes_are_rejected(self):
        for patch_body in ({"type": TransactionType.SALE}, {"type": "return"}, {"product_id": "other"}):
            with self.subTest(patch=patch_body):
                result = self.ledger.edit_transaction(self.purchase.id, patch_body)
                self.assertEqual(result.error.kind, ErrorKind.IMMUTABLE_FIELD)

    def test_notes_edit_leaves_stock_alone(self):
        result = self.ledger.edit_transaction(self.purchase.id, {"notes": "x"})
        self.assertTrue(result.ok)
        self.assertEqual(result.value.notes, "x")
        self.assertEqual(self.stock(), 10)

    def test_unchanged_stock_fields_are_accepted(self):
        result = self.ledger.edit_transaction(
            self.purchase.id,
            {"quantity": 10, "type": "purchase", "reference": "PO-7"},
        )
        self.assertTrue(result.ok)
        self.assertEqual(result.value.reference, "PO-7")

    def test_price_edit_does_not_recompute_total(self):
        result = self.ledger.edit_transaction(self.purchase.id, {"unit_price": 3.0})
        self.assertEqual(result.value.unit_price, 3.0)
        self.assertEqual(result.value.total_amount, 15.0)

    def test_edited_date_is_stored_in_utc(self):
        offset = timezone(timedelta(hours=-3))
        result = self.ledger.edit_transaction(
            self.purchase.id,
            {"transaction_date": datetime(2025, 3, 1, 22, 30, tzinfo=offset)},
        )
        self.assertTrue(result.ok)
        self.assertEqual(
            as_utc(result.value.transaction_date),
            datetime(2025, 3, 2, 1, 30, tzinfo=timezone.utc),
        )

    def test_unknown_field_is_invalid(self):
        result = self.ledger.edit_transaction(self.purchase.id, {"colour": "red"})
        self.assertEqual(result.error.kind, ErrorKind.INVALID_INPUT)


if __name__ == "__main__":
    unittest.main()
