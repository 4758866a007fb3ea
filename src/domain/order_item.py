"""Order Item Domain Entity

Line item snapshot owned by an Order. Price is the price agreed at checkout,
not a reference into the mutable catalog.
"""

from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class LineItemType(str, Enum):
    PURCHASE = "purchase"
    RENTAL = "rental"


class OrderItem(BaseModel, table=True):
    """
    Order Item - One captured line of an order

    Domain Rules:
    - line_index is the 0-based position within the order (unique per order)
    - Immutable after the order is created
    - Only RENTAL lines spawn a subscription on deposit confirmation
    """

    __tablename__ = "order_items"
    __table_args__ = (
        UniqueConstraint('order_id', 'line_index', name='uq_order_items_order_line'),
        Index('ix_order_items_order_id', 'order_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    order_id: str = Field(
        sa_column=Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Order"
    )

    line_index: int = Field(description="Position of the line within the order")

    artwork_id: str = Field(description="Catalog item reference")

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Unit price captured at order time"
    )

    item_type: LineItemType = Field(description="purchase or rental")

    def is_rental(self) -> bool:
        return self.item_type == LineItemType.RENTAL
