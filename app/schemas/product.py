from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.category import CategoryRead
from app.schemas.common import ApiInput, ApiModel


class ProductCreate(ApiInput):
    name: str = Field(min_length=1, max_length=200)
    sku: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    price: float = Field(ge=0)
    cost: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=50)
    category_id: str
    is_active: bool = True


class ProductUpdate(ApiInput):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    sku: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=50)
    category_id: Optional[str] = None
    is_active: Optional[bool] = None


class ProductSummary(ApiModel):
    id: str
    name: str
    sku: str
    price: float
    unit: Optional[str] = None
    is_active: bool
    category: Optional[CategoryRead] = None


class StockLevel(ApiModel):
    id: str
    current_stock: int
    minimum_stock: int
    maximum_stock: int
    average_cost: Optional[float] = None
    last_restocked_at: Optional[datetime] = None
    is_low_stock: bool


class ProductRead(ApiModel):
    id: str
    name: str
    sku: str
    description: Optional[str] = None
    price: float
    cost: Optional[float] = None
    unit: Optional[str] = None
    is_active: bool
    category_id: str
    category: Optional[CategoryRead] = None
    inventory: Optional[StockLevel] = None
    created_at: datetime
    updated_at: datetime
