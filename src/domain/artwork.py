"""Artwork (catalog item) table

Owned by the catalog module; the order engine only reads it through
CatalogGateway.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, generate_uuid


class ArtworkStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Artwork(BaseModel, table=True):
    __tablename__ = "artworks"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    artist_id: str = Field(index=True)
    price: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(18, 2), nullable=False))
    rental_price: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(18, 2), nullable=False))
    status: ArtworkStatus = Field(default=ArtworkStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.utcnow)
