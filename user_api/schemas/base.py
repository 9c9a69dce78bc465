"""
Base Pydantic schemas and common schema utilities.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    JSON keys are the PascalCase aliases; snake_case field names are accepted too.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class BaseDBSchema(BaseSchema):
    """Base schema for database models with common fields."""

    id: int = Field(..., alias="ID")
    created_at: datetime = Field(..., alias="CreatedAt")
    updated_at: datetime = Field(..., alias="UpdatedAt")
    deleted_at: Optional[datetime] = Field(None, alias="DeletedAt")

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Timestamps are written in UTC; SQLite and MySQL return them naive."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ResponseMessage(BaseModel):
    """Envelope for responses that carry no resource."""

    Message: str = ""
    Error: str = ""
