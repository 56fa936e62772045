from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import SortOrder
from app.database.session import get_db
from app.services.inventory_store import SqlInventoryStore
from app.services.stock_ledger import StockLedger
from app.services.transaction_store import SqlTransactionStore

_settings = get_settings()


def get_stock_ledger(db: Session = Depends(get_db)) -> StockLedger:
    return StockLedger(SqlInventoryStore(db), SqlTransactionStore(db))


class PageParams:
    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(_settings.DEFAULT_PAGE_SIZE, ge=1, le=_settings.MAX_PAGE_SIZE),
        sort_by: str | None = Query(None, alias="sortBy"),
        sort_order: SortOrder | None = Query(None, alias="sortOrder"),
    ):
        self.page = page
        self.limit = limit
        self.sort_by = sort_by
        self.sort_order = sort_order

    def sorting(self, default_field: str, default_order: SortOrder) -> dict:
        return {
            "sort_by": self.sort_by or default_field,
            "sort_order": (self.sort_order or default_order).value,
        }


__all__ = ["PageParams", "get_db", "get_stock_ledger"]
