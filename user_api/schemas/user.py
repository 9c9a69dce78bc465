"""
User schema definitions for request/response handling.

Request schemas only check types: length and format rules are enforced by the
validation engine in the service so that the first violated rule is reported.
"""

from typing import Optional

from pydantic import Field

from user_api.schemas.base import BaseSchema, BaseDBSchema


class UserBase(BaseSchema):
    """Base schema for user data."""

    username: str = Field("", alias="Username")
    first_name: str = Field("", alias="FirstName")
    last_name: str = Field("", alias="LastName")
    email: str = Field("", alias="Email")
    telephone: str = Field("", alias="Telephone")


class UserCreate(UserBase):
    """Schema for creating a new user. The password is plaintext."""

    password: str = Field("", alias="Password")


class UserUpdate(BaseSchema):
    """Schema for a partial update. Omitted or empty fields are left unchanged."""

    username: Optional[str] = Field(None, alias="Username")
    password: Optional[str] = Field(None, alias="Password")
    first_name: Optional[str] = Field(None, alias="FirstName")
    last_name: Optional[str] = Field(None, alias="LastName")
    email: Optional[str] = Field(None, alias="Email")
    telephone: Optional[str] = Field(None, alias="Telephone")

    def changes(self) -> dict[str, str]:
        """Return the supplied, non-empty fields keyed by column name."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value
        }


class UserResponse(BaseDBSchema, UserBase):
    """Schema for user data in responses. The password is the stored hash."""

    password: str = Field(..., alias="Password")
