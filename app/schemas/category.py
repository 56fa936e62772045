from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import ApiInput, ApiModel


class CategoryCreate(ApiInput):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(ApiInput):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryRead(ApiModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
