from datetime import date
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from app.core.constants import TRANSACTION_SORT_FIELDS
from app.core.dates import normalize_bound
from app.models.product import Product
from app.models.transaction import Transaction
from app.services.crud import apply_sort, paginate

_TRANSACTION_LOAD = (joinedload(Transaction.product).joinedload(Product.category),)


def _date_range(stmt, start_date: Optional[date], end_date: Optional[date]):
    start = normalize_bound(start_date)
    end = normalize_bound(end_date, end_of_day=True)
    if start is not None:
        stmt = stmt.where(Transaction.transaction_date >= start)
    if end is not None:
        stmt = stmt.where(Transaction.transaction_date <= end)
    return stmt


def list_transactions(
    db: Session,
    *,
    search: Optional[str] = None,
    transaction_type: Optional[str] = None,
    product_id: Optional[str] = None,
    reference: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    sort_order: str = "DESC",
):
    stmt = select(Transaction).join(Product, Product.id == Transaction.product_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Product.name.ilike(pattern),
                Product.sku.ilike(pattern),
                Transaction.notes.ilike(pattern),
            )
        )
    if transaction_type:
        stmt = stmt.where(Transaction.type == transaction_type)
    if product_id:
        stmt = stmt.where(Transaction.product_id == product_id)
    if reference:
        stmt = stmt.where(Transaction.reference.ilike(f"%{reference}%"))
    stmt = _date_range(stmt, start_date, end_date)
    stmt = apply_sort(stmt, Transaction, TRANSACTION_SORT_FIELDS, sort_by, sort_order)
    return paginate(db, stmt, page=page, limit=limit, options=_TRANSACTION_LOAD)


def transaction_summary(
    db: Session,
    *,
    product_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[dict]:
    stmt = select(
        Transaction.type,
        func.coalesce(func.sum(Transaction.quantity), 0).label("total_quantity"),
        func.coalesce(func.sum(Transaction.total_amount), 0).label("total_amount"),
        func.count(Transaction.id).label("transaction_count"),
    ).group_by(Transaction.type)
    if product_id:
        stmt = stmt.where(Transaction.product_id == product_id)
    stmt = _date_range(stmt, start_date, end_date).order_by(Transaction.type)

    return [
        {
            "type": row.type,
            "total_quantity": int(row.total_quantity),
            "total_amount": float(row.total_amount),
            "transaction_count": int(row.transaction_count),
        }
        for row in db.execute(stmt)
    ]


__all__ = ["list_transactions", "transaction_summary"]
