from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, joinedload

from app.core.constants import INVENTORY_SORT_FIELDS
from app.core.result import Result, not_found
from app.models.inventory import Inventory
from app.models.product import Product
from app.services.crud import apply_sort, get_by_id, paginate

_INVENTORY_LOAD = (joinedload(Inventory.product).joinedload(Product.category),)


def list_inventory(
    db: Session,
    *,
    search: Optional[str] = None,
    low_stock: Optional[bool] = None,
    min_stock: Optional[int] = None,
    max_stock: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    sort_order: str = "ASC",
):
    stmt = select(Inventory).join(Product, Product.id == Inventory.product_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Product.name.ilike(pattern), Product.sku.ilike(pattern)))
    if low_stock:
        stmt = stmt.where(
            Inventory.current_stock <= Inventory.minimum_stock,
            Inventory.minimum_stock > 0,
        )
    if min_stock is not None:
        stmt = stmt.where(Inventory.current_stock >= min_stock)
    if max_stock is not None:
        stmt = stmt.where(Inventory.current_stock <= max_stock)
    stmt = apply_sort(stmt, Inventory, INVENTORY_SORT_FIELDS, sort_by, sort_order)
    return paginate(db, stmt, page=page, limit=limit, options=_INVENTORY_LOAD)


def low_stock_items(db: Session) -> list[Inventory]:
    rows = (
        db.execute(
            select(Inventory)
            .options(*_INVENTORY_LOAD)
            .where(
                Inventory.current_stock <= Inventory.minimum_stock,
                Inventory.minimum_stock > 0,
            )
            .order_by(Inventory.current_stock.asc(), Inventory.id)
        )
        .scalars()
        .all()
    )
    return list(rows)


def get_inventory(db: Session, inventory_id: str) -> Result[Inventory]:
    inventory = get_by_id(db, Inventory, inventory_id, options=_INVENTORY_LOAD)
    if inventory is None:
        return not_found("Inventory", inventory_id)
    return Result.success(inventory)


def update_thresholds(db: Session, inventory_id: str, fields: dict) -> Result[Inventory]:
    """Edit thresholds and average cost; stock itself only moves through transactions."""
    found = get_inventory(db, inventory_id)
    if not found.ok:
        return found
    inventory = found.value
    for name in ("minimum_stock", "maximum_stock"):
        if fields.get(name) is not None:
            setattr(inventory, name, fields[name])
    if "average_cost" in fields:
        inventory.average_cost = fields["average_cost"]
    db.commit()
    return get_inventory(db, inventory_id)


__all__ = ["get_inventory", "list_inventory", "low_stock_items", "update_thresholds"]
