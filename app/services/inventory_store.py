from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from app.core.dates import utcnow
from app.core.result import ErrorKind, Result
from app.models.inventory import Inventory
from app.models.product import Product


class InventoryStore(Protocol):
    def get_by_product(self, product_id: str) -> Result[Inventory]:
        ...

    def apply_delta(self, product_id: str, signed_delta: int) -> Result[Inventory]:
        ...


class SqlInventoryStore:
    """Inventory rows behind a SQLAlchemy session.

    ``apply_delta`` is one conditional UPDATE, so the non-negative check and
    the write cannot interleave with another request touching the same row.
    """

    def __init__(self, db: Session):
        self._db = db

    def _load(self, product_id: str):
        return (
            self._db.execute(
                select(Inventory)
                .options(joinedload(Inventory.product).joinedload(Product.category))
                .where(Inventory.product_id == product_id)
                .execution_options(populate_existing=True)
            )
            .scalars()
            .first()
        )

    def get_by_product(self, product_id: str) -> Result[Inventory]:
        inventory = self._load(product_id)
        if inventory is None:
            return Result.failure(
                ErrorKind.NOT_FOUND,
                f"Inventory for product {product_id} not found",
            )
        return Result.success(inventory)

    def apply_delta(self, product_id: str, signed_delta: int) -> Result[Inventory]:
        signed_delta = int(signed_delta)
        now = utcnow()
        values = {
            "current_stock": Inventory.current_stock + signed_delta,
            "updated_at": now,
        }
        if signed_delta > 0:
            values["last_restocked_at"] = now

        stmt = (
            update(Inventory)
            .where(
                Inventory.product_id == product_id,
                Inventory.current_stock + signed_delta >= 0,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        # Nothing is committed unless the re-read succeeds too; a raised error
        # always means the delta was not applied.
        try:
            affected = self._db.execute(stmt).rowcount
            updated = self._load(product_id) if affected else None
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

        if updated is None:
            current = self._load(product_id)
            if current is None:
                return Result.failure(
                    ErrorKind.NOT_FOUND,
                    f"Inventory for product {product_id} not found",
                )
            return Result.failure(
                ErrorKind.INSUFFICIENT_STOCK,
                "Insufficient stock for product {}: available {}, change {}".format(
                    product_id, current.current_stock, signed_delta
                ),
            )
        return Result.success(updated)


__all__ = ["InventoryStore", "SqlInventoryStore"]
