"""Couples transaction rows to the inventory stock counter.

Every persisted transaction has had its signed quantity applied to its
product's ``current_stock``; a transaction that cannot be applied is removed
again, and a transaction whose effect cannot be reversed is not deleted.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.core.constants import TransactionType
from app.core.dates import as_utc
from app.core.result import ErrorKind, Result
from app.core.stock_rules import is_low_stock, reversal_delta, signed_delta
from app.models.transaction import Transaction
from app.services.inventory_store import InventoryStore
from app.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

STOCK_FIELDS = ("product_id", "type", "quantity")
EDITABLE_FIELDS = ("unit_price", "total_amount", "notes", "reference", "transaction_date")


@dataclass
class TransactionDraft:
    product_id: str
    type: TransactionType
    quantity: int
    unit_price: Optional[float] = None
    total_amount: Optional[float] = None
    notes: Optional[str] = None
    reference: Optional[str] = None
    transaction_date: Optional[datetime] = None


def compute_total_amount(quantity: int, unit_price=None, total_amount=None) -> float:
    if total_amount is not None:
        return float(total_amount)
    if unit_price is not None:
        return float(unit_price) * int(quantity)
    return 0.0


def _same_value(field: str, requested, current) -> bool:
    if field == "type":
        try:
            return TransactionType(requested) == TransactionType(current)
        except ValueError:
            return False
    if field == "quantity":
        return int(requested) == int(current)
    return str(requested) == str(current)


class StockLedger:
    def __init__(self, inventory: InventoryStore, transactions: TransactionStore):
        self._inventory = inventory
        self._transactions = transactions

    def get_transaction(self, transaction_id: str) -> Result[Transaction]:
        return self._transactions.get(transaction_id)

    def record_transaction(self, draft: TransactionDraft) -> Result[Transaction]:
        try:
            transaction_type = TransactionType(draft.type)
        except ValueError:
            return Result.failure(
                ErrorKind.INVALID_INPUT, f"Invalid transaction type: {draft.type}"
            )
        if int(draft.quantity) < 1:
            return Result.failure(ErrorKind.INVALID_INPUT, "quantity must be at least 1")

        inventory = self._inventory.get_by_product(draft.product_id)
        if not inventory.ok:
            return Result.from_failure(inventory.error)

        fields: dict[str, Any] = {
            "product_id": draft.product_id,
            "type": transaction_type,
            "quantity": int(draft.quantity),
            "unit_price": draft.unit_price,
            "total_amount": compute_total_amount(
                draft.quantity, draft.unit_price, draft.total_amount
            ),
            "notes": draft.notes,
            "reference": draft.reference,
        }
        if draft.transaction_date is not None:
            fields["transaction_date"] = as_utc(draft.transaction_date)

        created = self._transactions.create(fields)
        if not created.ok:
            return created
        transaction_id = created.value.id
        delta = signed_delta(transaction_type, draft.quantity)

        try:
            applied = self._inventory.apply_delta(draft.product_id, delta)
        except Exception:
            self._compensate(transaction_id, draft.product_id, delta)
            raise
        if not applied.ok:
            self._compensate(transaction_id, draft.product_id, delta, applied.error.kind)
            return Result.from_failure(applied.error)

        logger.info(
            "Recorded %s of %s for product %s (stock now %s)",
            transaction_type.value,
            draft.quantity,
            draft.product_id,
            applied.value.current_stock,
            extra={
                "transaction_id": transaction_id,
                "product_id": draft.product_id,
                "transaction_type": transaction_type.value,
                "delta": delta,
            },
        )
        return self._transactions.get(transaction_id)

    def _compensate(self, transaction_id, product_id, delta, error_kind=None) -> None:
        context = {
            "transaction_id": transaction_id,
            "product_id": product_id,
            "delta": delta,
            "error_kind": error_kind.value if error_kind else None,
        }
        removed = self._transactions.delete(transaction_id)
        if not removed.ok:
            logger.error(
                "Compensation failed for transaction %s: %s",
                transaction_id,
                removed.error.message,
                extra=context,
            )
            return
        logger.warning(
            "Stock update rejected; removed transaction %s", transaction_id, extra=context
        )

    def void_transaction(self, transaction_id: str) -> Result[None]:
        found = self._transactions.get(transaction_id)
        if not found.ok:
            return Result.from_failure(found.error)
        transaction = found.value
        product_id = transaction.product_id
        delta = reversal_delta(transaction.type, transaction.quantity)

        reverted = self._inventory.apply_delta(product_id, delta)
        if not reverted.ok:
            logger.warning(
                "Refusing to delete transaction %s: %s",
                transaction_id,
                reverted.error.message,
                extra={
                    "transaction_id": transaction_id,
                    "product_id": product_id,
                    "delta": delta,
                    "error_kind": reverted.error.kind.value,
                },
            )
            return Result.failure(
                reverted.error.kind,
                "Cannot delete transaction due to inventory constraints: {}".format(
                    reverted.error.message
                ),
            )

        try:
            removed = self._transactions.delete(transaction_id)
        except Exception:
            self._restore(product_id, delta)
            raise
        if not removed.ok:
            # Deleted concurrently; put back the reversal we just applied.
            self._restore(product_id, delta)
            return removed

        logger.info(
            "Voided transaction %s (stock now %s)",
            transaction_id,
            reverted.value.current_stock,
            extra={"transaction_id": transaction_id, "product_id": product_id, "delta": delta},
        )
        return Result.success(None)

    def _restore(self, product_id, delta) -> None:
        restored = self._inventory.apply_delta(product_id, -delta)
        if not restored.ok:
            logger.error(
                "Could not restore stock for product %s after failed delete: %s",
                product_id,
                restored.error.message,
                extra={"product_id": product_id, "delta": -delta},
            )

    def edit_transaction(self, transaction_id: str, patch: dict[str, Any]) -> Result[Transaction]:
        found = self._transactions.get(transaction_id)
        if not found.ok:
            return found
        transaction = found.value

        for field in STOCK_FIELDS:
            requested = patch.get(field)
            if requested is None:
                continue
            if not _same_value(field, requested, getattr(transaction, field)):
                return Result.failure(
                    ErrorKind.IMMUTABLE_FIELD,
                    "Cannot modify quantity, type or product of existing transactions",
                )

        unknown = sorted(set(patch) - set(STOCK_FIELDS) - set(EDITABLE_FIELDS))
        if unknown:
            return Result.failure(
                ErrorKind.INVALID_INPUT, "Unknown fields: {}".format(", ".join(unknown))
            )

        changes = {name: value for name, value in patch.items() if name in EDITABLE_FIELDS}
        if "transaction_date" in changes:
            if changes["transaction_date"] is None:
                changes.pop("transaction_date")
            else:
                changes["transaction_date"] = as_utc(changes["transaction_date"])
        if not changes:
            return found
        return self._transactions.update(transaction_id, changes)

    def current_stock(self, product_id: str) -> Result[int]:
        inventory = self._inventory.get_by_product(product_id)
        if not inventory.ok:
            return Result.from_failure(inventory.error)
        return Result.success(inventory.value.current_stock)

    @staticmethod
    def is_low_stock(inventory) -> bool:
        return is_low_stock(inventory)


__all__ = [
    "EDITABLE_FIELDS",
    "STOCK_FIELDS",
    "StockLedger",
    "TransactionDraft",
    "compute_total_amount",
]
