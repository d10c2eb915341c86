from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema


class ActivityLogCreate(BaseCreateSchema):
    """Manual activity entry posted by a client."""
    action_type: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    item_sku: Optional[str] = Field(None, max_length=50)
    user_id: Optional[str] = Field(None, max_length=50)


class ActivityLogResponse(BaseResponseSchema):
    """Stored entry plus display fields derived at read time."""
    id: int
    action_type: str
    description: str
    item_sku: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    timestamp: datetime

    # Derived, never stored
    title: str
    icon: str
    color_classes: str
    relative_time: str
    item_link: str


class StockMovementResponse(BaseModel):
    """Parallel per-day counts of Add (inbound) and Remove (outbound) entries."""
    days: List[str]
    inbound: List[int]
    outbound: List[int]
