from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.task import TaskStatus, TaskPriority
from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema


class TaskCreate(BaseCreateSchema):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: datetime
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = Field("General", max_length=50)
    assigned_to: Optional[str] = Field(None, max_length=50)
    related_item_sku: Optional[str] = Field(None, max_length=50)
    related_shipment_id: Optional[str] = Field(None, max_length=50)


class TaskUpdate(BaseUpdateSchema):
    id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = Field(None, max_length=50)
    assigned_to: Optional[str] = Field(None, max_length=50)
    related_item_sku: Optional[str] = Field(None, max_length=50)
    related_shipment_id: Optional[str] = Field(None, max_length=50)


class TaskResponse(BaseResponseSchema):
    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    status: str
    priority: str
    category: str
    assigned_to: Optional[str] = None
    related_item_sku: Optional[str] = None
    related_shipment_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    is_completed: bool
