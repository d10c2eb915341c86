from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.models.worker import WorkerRole
from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema


DEFAULT_DEPARTMENT = "General"


class WorkerCreate(BaseCreateSchema):
    """Worker create schema."""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6, description="Plain password, hashed before storage")
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=20)
    role: WorkerRole = WorkerRole.EMPLOYEE
    department: Optional[str] = Field(DEFAULT_DEPARTMENT, max_length=100)


class WorkerUpdate(BaseUpdateSchema):
    """Worker update schema. Password is rehashed only when sent."""
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=20)
    role: Optional[WorkerRole] = None
    department: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=6)


class WorkerResponse(BaseResponseSchema):
    """Worker response schema (never exposes the password hash)."""
    id: int
    username: str
    email: str
    full_name: str
    phone_number: Optional[str] = None
    role: str
    department: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None
    is_active: bool
