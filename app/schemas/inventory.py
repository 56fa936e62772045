from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import ApiInput, ApiModel
from app.schemas.product import ProductSummary


class InventoryUpdate(ApiInput):
    minimum_stock: Optional[int] = Field(None, ge=0)
    maximum_stock: Optional[int] = Field(None, ge=0)
    average_cost: Optional[float] = Field(None, ge=0)


class InventoryRead(ApiModel):
    id: str
    product_id: str
    current_stock: int
    minimum_stock: int
    maximum_stock: int
    average_cost: Optional[float] = None
    last_restocked_at: Optional[datetime] = None
    is_low_stock: bool
    product: Optional[ProductSummary] = None
    created_at: datetime
    updated_at: datetime
