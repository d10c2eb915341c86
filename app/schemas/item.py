from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema


AUTO_GENERATE_SKU = "AUTO-GENERATE"


class ItemCreate(BaseCreateSchema):
    """Item create schema. An empty SKU or AUTO-GENERATE asks the server to pick one."""
    sku: Optional[str] = Field(None, max_length=50, description="Unique SKU")
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(0, ge=0)
    location: str = Field(..., min_length=1, max_length=100)
    condition: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = None


class ItemUpdate(BaseUpdateSchema):
    """Item update schema. `sku`, when sent, must match the path."""
    sku: Optional[str] = Field(None, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    condition: Optional[str] = Field(None, min_length=1, max_length=50)
    notes: Optional[str] = None


class ItemResponse(BaseResponseSchema):
    """Item response schema."""
    sku: str
    name: str
    category: str
    quantity: int
    location: str
    condition: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str
