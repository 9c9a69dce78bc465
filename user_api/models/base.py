"""
Base model configuration and common model utilities.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import Column, DateTime
from sqlalchemy.ext.declarative import declared_attr

from user_api.core.database import Base

UTC = ZoneInfo("UTC")


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


class BaseModel(Base):
    """Base model class with timestamps and soft delete support."""

    __abstract__ = True

    @declared_attr
    def __tablename__(cls) -> str:
        """Generate table name automatically based on class name."""
        return f"{cls.__name__.lower()}s"

    created_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )
    # Set instead of removing the row; marked rows are excluded from reads
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
