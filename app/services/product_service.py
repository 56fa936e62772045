from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from app.core.constants import PRODUCT_SORT_FIELDS
from app.core.result import ErrorKind, Result, not_found
from app.models.category import Category
from app.models.inventory import Inventory
from app.models.product import Product
from app.models.transaction import Transaction
from app.services.crud import apply_sort, commit_or_conflict, get_by_id, paginate

_PRODUCT_LOAD = (joinedload(Product.category), joinedload(Product.inventory))
_NULLABLE_FIELDS = ("description", "cost", "unit")
_SKU_CONFLICT = "Product with this SKU already exists"


def _sku_taken(db: Session, sku: str) -> bool:
    return db.execute(select(Product.id).where(Product.sku == sku)).first() is not None


def _category_exists(db: Session, category_id: str) -> bool:
    return db.get(Category, category_id) is not None


def create_product(db: Session, fields: dict) -> Result[Product]:
    if _sku_taken(db, fields["sku"]):
        return Result.failure(ErrorKind.CONFLICT, _SKU_CONFLICT)
    if not _category_exists(db, fields["category_id"]):
        return not_found("Category", fields["category_id"])

    product = Product(**fields)
    product.inventory = Inventory(current_stock=0, minimum_stock=0, maximum_stock=0)
    db.add(product)
    committed = commit_or_conflict(db, _SKU_CONFLICT)
    if not committed.ok:
        return Result.from_failure(committed.error)
    return get_product(db, product.id)


def list_products(
    db: Session,
    *,
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    sort_order: str = "DESC",
):
    stmt = select(Product)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Product.name.ilike(pattern),
                Product.sku.ilike(pattern),
                Product.description.ilike(pattern),
            )
        )
    if category_id:
        stmt = stmt.where(Product.category_id == category_id)
    if is_active is not None:
        stmt = stmt.where(Product.is_active == is_active)
    if min_price is not None:
        stmt = stmt.where(Product.price >= min_price)
    if max_price is not None:
        stmt = stmt.where(Product.price <= max_price)
    stmt = apply_sort(stmt, Product, PRODUCT_SORT_FIELDS, sort_by, sort_order)
    return paginate(db, stmt, page=page, limit=limit, options=_PRODUCT_LOAD)


def get_product(db: Session, product_id: str) -> Result[Product]:
    product = get_by_id(db, Product, product_id, options=_PRODUCT_LOAD)
    if product is None:
        return not_found("Product", product_id)
    return Result.success(product)


def update_product(db: Session, product_id: str, fields: dict) -> Result[Product]:
    fields = {name: value for name, value in fields.items() if value is not None or name in _NULLABLE_FIELDS}
    found = get_product(db, product_id)
    if not found.ok:
        return found
    product = found.value

    new_sku = fields.get("sku")
    if new_sku and new_sku != product.sku and _sku_taken(db, new_sku):
        return Result.failure(ErrorKind.CONFLICT, _SKU_CONFLICT)
    new_category = fields.get("category_id")
    if new_category and new_category != product.category_id and not _category_exists(db, new_category):
        return not_found("Category", new_category)

    for name, value in fields.items():
        setattr(product, name, value)
    committed = commit_or_conflict(db, _SKU_CONFLICT)
    if not committed.ok:
        return Result.from_failure(committed.error)
    return get_product(db, product_id)


def delete_product(db: Session, product_id: str) -> Result[None]:
    found = get_product(db, product_id)
    if not found.ok:
        return Result.from_failure(found.error)
    transaction_count = db.execute(
        select(func.count(Transaction.id)).where(Transaction.product_id == product_id)
    ).scalar_one()
    if transaction_count > 0:
        return Result.failure(
            ErrorKind.CONFLICT, "Cannot delete product with transaction history"
        )
    db.delete(found.value)
    return commit_or_conflict(db, "Cannot delete product with transaction history")


__all__ = [
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "update_product",
]
