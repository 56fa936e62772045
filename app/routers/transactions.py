from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_TRANSACTION_SORT, SortOrder, TransactionType
from app.core.http import unwrap
from app.dependencies import PageParams, get_db, get_stock_ledger
from app.schemas.common import Page
from app.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionSummaryRow,
    TransactionUpdate,
)
from app.services import transaction_service
from app.services.stock_ledger import StockLedger, TransactionDraft

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    ledger: StockLedger = Depends(get_stock_ledger),
):
    draft = TransactionDraft(**payload.model_dump())
    return unwrap(ledger.record_transaction(draft))


@router.get("", response_model=Page[TransactionRead])
def list_transactions(
    search: str | None = Query(None),
    transaction_type: TransactionType | None = Query(None, alias="type"),
    product_id: str | None = Query(None, alias="productId"),
    reference: str | None = Query(None),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    return transaction_service.list_transactions(
        db,
        search=search,
        transaction_type=transaction_type,
        product_id=product_id,
        reference=reference,
        start_date=start_date,
        end_date=end_date,
        page=paging.page,
        limit=paging.limit,
        **paging.sorting(DEFAULT_TRANSACTION_SORT, SortOrder.DESC),
    )


@router.get("/summary", response_model=List[TransactionSummaryRow])
def transaction_summary(
    product_id: str | None = Query(None, alias="productId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    return transaction_service.transaction_summary(
        db,
        product_id=product_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/{transaction_id}", response_model=TransactionRead)
def get_transaction(transaction_id: str, ledger: StockLedger = Depends(get_stock_ledger)):
    return unwrap(ledger.get_transaction(transaction_id))


@router.patch("/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    ledger: StockLedger = Depends(get_stock_ledger),
):
    return unwrap(ledger.edit_transaction(transaction_id, payload.model_dump(exclude_unset=True)))


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: str, ledger: StockLedger = Depends(get_stock_ledger)):
    unwrap(ledger.void_transaction(transaction_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
