from datetime import datetime
from typing import Optional

from pydantic import Field

from app.core.constants import TransactionType
from app.schemas.common import ApiInput, ApiModel
from app.schemas.product import ProductSummary


class TransactionCreate(ApiInput):
    product_id: str
    type: TransactionType
    quantity: int = Field(ge=1)
    unit_price: Optional[float] = Field(None, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=500)
    reference: Optional[str] = Field(None, max_length=100)
    transaction_date: Optional[datetime] = None


class TransactionUpdate(ApiInput):
    # Accepted only so unchanged values pass; changes are rejected by the ledger.
    product_id: Optional[str] = None
    type: Optional[TransactionType] = None
    quantity: Optional[int] = Field(None, ge=1)

    unit_price: Optional[float] = Field(None, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=500)
    reference: Optional[str] = Field(None, max_length=100)
    transaction_date: Optional[datetime] = None


class TransactionRead(ApiModel):
    id: str
    product_id: str
    type: TransactionType
    quantity: int
    unit_price: Optional[float] = None
    total_amount: Optional[float] = None
    notes: Optional[str] = None
    reference: Optional[str] = None
    transaction_date: datetime
    product: Optional[ProductSummary] = None
    created_at: datetime
    updated_at: datetime


class TransactionSummaryRow(ApiModel):
    type: TransactionType
    total_quantity: int
    total_amount: float
    transaction_count: int
