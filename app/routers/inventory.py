from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_INVENTORY_SORT, SortOrder
from app.core.http import unwrap
from app.dependencies import PageParams, get_db
from app.schemas.common import Page
from app.schemas.inventory import InventoryRead, InventoryUpdate
from app.services import inventory_service
from app.services.inventory_store import SqlInventoryStore

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=Page[InventoryRead])
def list_inventory(
    search: str | None = Query(None),
    low_stock: bool | None = Query(None, alias="lowStock"),
    min_stock: int | None = Query(None, ge=0, alias="minStock"),
    max_stock: int | None = Query(None, ge=0, alias="maxStock"),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    return inventory_service.list_inventory(
        db,
        search=search,
        low_stock=low_stock,
        min_stock=min_stock,
        max_stock=max_stock,
        page=paging.page,
        limit=paging.limit,
        **paging.sorting(DEFAULT_INVENTORY_SORT, SortOrder.ASC),
    )


@router.get("/low-stock", response_model=List[InventoryRead])
def low_stock_items(db: Session = Depends(get_db)):
    return inventory_service.low_stock_items(db)


@router.get("/product/{product_id}", response_model=InventoryRead)
def get_inventory_for_product(product_id: str, db: Session = Depends(get_db)):
    return unwrap(SqlInventoryStore(db).get_by_product(product_id))


@router.get("/{inventory_id}", response_model=InventoryRead)
def get_inventory(inventory_id: str, db: Session = Depends(get_db)):
    return unwrap(inventory_service.get_inventory(db, inventory_id))


@router.patch("/{inventory_id}", response_model=InventoryRead)
def update_inventory(inventory_id: str, payload: InventoryUpdate, db: Session = Depends(get_db)):
    return unwrap(
        inventory_service.update_thresholds(db, inventory_id, payload.model_dump(exclude_unset=True))
    )


__all__ = ["router"]
