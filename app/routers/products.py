from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_PRODUCT_SORT, SortOrder
from app.core.http import unwrap
from app.dependencies import PageParams, get_db
from app.schemas.common import Page
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services import product_service

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=Page[ProductRead])
def list_products(
    search: str | None = Query(None),
    category_id: str | None = Query(None, alias="categoryId"),
    is_active: bool | None = Query(None, alias="isActive"),
    min_price: float | None = Query(None, ge=0, alias="minPrice"),
    max_price: float | None = Query(None, ge=0, alias="maxPrice"),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    return product_service.list_products(
        db,
        search=search,
        category_id=category_id,
        is_active=is_active,
        min_price=min_price,
        max_price=max_price,
        page=paging.page,
        limit=paging.limit,
        **paging.sorting(DEFAULT_PRODUCT_SORT, SortOrder.DESC),
    )


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return unwrap(product_service.create_product(db, payload.model_dump()))


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return unwrap(product_service.get_product(db, product_id))


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    return unwrap(
        product_service.update_product(db, product_id, payload.model_dump(exclude_unset=True))
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    unwrap(product_service.delete_product(db, product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
