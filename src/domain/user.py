"""User table

Owned by the identity module; the order engine reads it through
IdentityGateway and writes only the saved shipping address.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class UserRole(str, Enum):
    ADMIN = "admin"
    PARTNER = "partner"
    USER = "user"


class User(BaseModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str = Field(sa_column=Column(String(100), nullable=False))
    role: UserRole = Field(default=UserRole.USER)
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    address: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    detail_address: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    zip_code: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
