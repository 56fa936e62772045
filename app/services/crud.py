import math
from typing import Any, Iterable, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import SortOrder
from app.core.result import ErrorKind, Result


def get_by_id(db: Session, model, entity_id: str, options: Iterable[Any] = ()):
    stmt = (
        select(model)
        .options(*options)
        .where(model.id == entity_id)
        .execution_options(populate_existing=True)
    )
    return db.execute(stmt).scalars().first()


def apply_sort(stmt: Select, model, sort_fields: dict[str, str], sort_by: Optional[str], sort_order):
    column_name = sort_fields.get(sort_by or "")
    if column_name is None:
        return stmt
    column = getattr(model, column_name)
    if SortOrder(sort_order) == SortOrder.DESC:
        return stmt.order_by(column.desc(), model.id)
    return stmt.order_by(column.asc(), model.id)


def paginate(
    db: Session,
    stmt: Select,
    *,
    page: int,
    limit: int,
    options: Iterable[Any] = (),
) -> dict[str, Any]:
    total = db.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    rows = (
        db.execute(stmt.options(*options).offset((page - 1) * limit).limit(limit))
        .scalars()
        .all()
    )
    return {
        "data": list(rows),
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


def commit_or_conflict(db: Session, conflict_message: str) -> Result[None]:
    """Commit, reporting a constraint violation as CONFLICT.

    Covers duplicates inserted by a concurrent request between the
    uniqueness pre-check and the commit.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Result.failure(ErrorKind.CONFLICT, conflict_message)
    except SQLAlchemyError:
        db.rollback()
        raise
    return Result.success(None)


__all__ = ["apply_sort", "commit_or_conflict", "get_by_id", "paginate"]
