from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.stocktake import StocktakeStatus
from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema


class StocktakeCreate(BaseCreateSchema):
    """Stocktake create schema. New stocktakes always start In Progress."""
    zone: str = Field(..., min_length=1, max_length=50)
    shelf: str = Field(..., min_length=1, max_length=50)
    counter: str = Field(..., min_length=1, max_length=100)
    notes: Optional[str] = None


class StocktakeUpdate(BaseUpdateSchema):
    id: Optional[int] = None
    zone: Optional[str] = Field(None, min_length=1, max_length=50)
    shelf: Optional[str] = Field(None, min_length=1, max_length=50)
    counter: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[StocktakeStatus] = None
    notes: Optional[str] = None


class StocktakeResponse(BaseResponseSchema):
    id: int
    zone: str
    shelf: str
    counter: str
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
