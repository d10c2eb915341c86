from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from app.models.shipment import ShipmentType
from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema


class ShipmentLine(BaseCreateSchema):
    """One SKU/quantity line of a shipment."""
    sku: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., ge=1)
    notes: Optional[str] = None


class ShipmentCreate(BaseCreateSchema):
    """Shipment create schema. The id is chosen by the caller."""
    id: str = Field(..., min_length=1, max_length=50)
    type: ShipmentType
    partner_name: str = Field(..., min_length=1, max_length=200)
    status: str = Field("Pending", min_length=1, max_length=50)
    eta: datetime
    priority: str = Field("Medium", min_length=1, max_length=20)
    notes: Optional[str] = None
    items: List[ShipmentLine] = Field(default_factory=list)


class ShipmentUpdate(BaseUpdateSchema):
    """
    Shipment update schema.

    `items`, when present, replaces the shipment's lines. Omit it to keep them.
    """
    id: Optional[str] = Field(None, max_length=50)
    type: Optional[ShipmentType] = None
    partner_name: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    eta: Optional[datetime] = None
    priority: Optional[str] = Field(None, min_length=1, max_length=20)
    notes: Optional[str] = None
    items: Optional[List[ShipmentLine]] = None


class ShipmentItemResponse(BaseResponseSchema):
    shipment_id: str
    sku: str
    quantity: int
    notes: Optional[str] = None


class ShipmentResponse(BaseResponseSchema):
    """Shipment response schema."""
    id: str
    type: str
    partner_name: str
    status: str
    eta: datetime
    priority: str
    notes: Optional[str] = None
    created_at: datetime
    created_by: str
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    items: List[ShipmentItemResponse] = []


class ShipmentSummary(BaseModel):
    """Dashboard counters for open and recently closed shipments."""
    active_shipments: int
    high_priority: int
    pending_inbound: int
    pending_outbound: int
    arriving_today: int
    departing_today: int
    completed_today: int
