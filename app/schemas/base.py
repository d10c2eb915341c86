"""
Base Schema Classes for Pydantic Models

RULE: All response schemas that read from ORM models inherit from BaseResponseSchema.
"""

from pydantic import BaseModel, ConfigDict


class BaseResponseSchema(BaseModel):
    """
    Base class for all response schemas that read from ORM models.

    Usage:
        class ItemResponse(BaseResponseSchema):
            sku: str
            name: str
    """
    model_config = ConfigDict(
        from_attributes=True,
        # Allow population by field name or alias
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """
    Base class for create/input schemas.

    Unknown fields are ignored so older clients keep working.
    """
    model_config = ConfigDict(
        extra='ignore',
        str_strip_whitespace=True,
    )


class BaseUpdateSchema(BaseModel):
    """
    Base class for update/patch schemas.

    All fields are optional by default for partial updates; services apply
    only the fields the caller actually sent (`exclude_unset=True`).
    """
    model_config = ConfigDict(
        extra='ignore',
        str_strip_whitespace=True,
    )
