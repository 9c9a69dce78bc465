"""
User model definition.
"""

from sqlalchemy import Column, String
from sqlalchemy.sql.sqltypes import Integer

from user_api.models.base import BaseModel


class User(BaseModel):
    """User model for storing user information."""

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # Always a hash
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    telephone = Column(String(50), nullable=False)
