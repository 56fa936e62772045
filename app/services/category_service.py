from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.constants import CATEGORY_SORT_FIELDS
from app.core.result import ErrorKind, Result, not_found
from app.models.category import Category
from app.models.product import Product
from app.services.crud import apply_sort, commit_or_conflict, get_by_id, paginate

_NAME_CONFLICT = "Category with this name already exists"


def _name_taken(db: Session, name: str) -> bool:
    return db.execute(select(Category.id).where(Category.name == name)).first() is not None


def create_category(db: Session, fields: dict) -> Result[Category]:
    if _name_taken(db, fields["name"]):
        return Result.failure(ErrorKind.CONFLICT, _NAME_CONFLICT)
    category = Category(**fields)
    db.add(category)
    committed = commit_or_conflict(db, _NAME_CONFLICT)
    if not committed.ok:
        return Result.from_failure(committed.error)
    return Result.success(category)


def list_categories(
    db: Session,
    *,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    sort_order: str = "DESC",
):
    stmt = select(Category)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Category.name.ilike(pattern), Category.description.ilike(pattern)))
    if is_active is not None:
        stmt = stmt.where(Category.is_active == is_active)
    stmt = apply_sort(stmt, Category, CATEGORY_SORT_FIELDS, sort_by, sort_order)
    return paginate(db, stmt, page=page, limit=limit)


def get_category(db: Session, category_id: str) -> Result[Category]:
    category = get_by_id(db, Category, category_id)
    if category is None:
        return not_found("Category", category_id)
    return Result.success(category)


def update_category(db: Session, category_id: str, fields: dict) -> Result[Category]:
    fields = {name: value for name, value in fields.items() if value is not None or name == "description"}
    found = get_category(db, category_id)
    if not found.ok:
        return found
    category = found.value
    new_name = fields.get("name")
    if new_name and new_name != category.name and _name_taken(db, new_name):
        return Result.failure(ErrorKind.CONFLICT, _NAME_CONFLICT)
    for name, value in fields.items():
        setattr(category, name, value)
    committed = commit_or_conflict(db, _NAME_CONFLICT)
    if not committed.ok:
        return Result.from_failure(committed.error)
    return get_category(db, category_id)


def delete_category(db: Session, category_id: str) -> Result[None]:
    found = get_category(db, category_id)
    if not found.ok:
        return Result.from_failure(found.error)
    product_count = db.execute(
        select(func.count(Product.id)).where(Product.category_id == category_id)
    ).scalar_one()
    if product_count > 0:
        return Result.failure(
            ErrorKind.CONFLICT, "Cannot delete category with associated products"
        )
    db.delete(found.value)
    return commit_or_conflict(db, "Cannot delete category with associated products")


__all__ = [
    "create_category",
    "delete_category",
    "get_category",
    "list_categories",
    "update_category",
]
