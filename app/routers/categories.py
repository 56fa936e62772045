from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_CATEGORY_SORT, SortOrder
from app.core.http import unwrap
from app.dependencies import PageParams, get_db
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.schemas.common import Page
from app.services import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=Page[CategoryRead])
def list_categories(
    search: str | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    return category_service.list_categories(
        db,
        search=search,
        is_active=is_active,
        page=paging.page,
        limit=paging.limit,
        **paging.sorting(DEFAULT_CATEGORY_SORT, SortOrder.DESC),
    )


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return unwrap(category_service.create_category(db, payload.model_dump()))


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: str, db: Session = Depends(get_db)):
    return unwrap(category_service.get_category(db, category_id))


@router.patch("/{category_id}", response_model=CategoryRead)
def update_category(category_id: str, payload: CategoryUpdate, db: Session = Depends(get_db)):
    return unwrap(
        category_service.update_category(db, category_id, payload.model_dump(exclude_unset=True))
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, db: Session = Depends(get_db)):
    unwrap(category_service.delete_category(db, category_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
