from app.services.inventory_store import InventoryStore, SqlInventoryStore
from app.services.stock_ledger import StockLedger, TransactionDraft
from app.services.transaction_store import SqlTransactionStore, TransactionStore

__all__ = [
    "InventoryStore",
    "SqlInventoryStore",
    "SqlTransactionStore",
    "StockLedger",
    "TransactionDraft",
    "TransactionStore",
]
