"""Order Domain Entity

A buyer's checkout record. Captures line items (see OrderItem), the total,
a shipping address snapshot and the bank account the buyer was told to pay
into. Orders are audit records and are never hard-deleted.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, generate_uuid


class OrderStatus(str, Enum):
    """Order status types"""
    PENDING_DEPOSIT = "pending_deposit"
    PAID = "paid"
    SHIPPING = "shipping"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# Forward path plus cancellation from any non-terminal status
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING_DEPOSIT: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPING, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    return to_status in ALLOWED_TRANSITIONS[from_status]


class Order(BaseModel, table=True):
    """
    Order - Buyer checkout intent paid by manual bank transfer

    Domain Rules:
    - At least one line item (stored in order_items)
    - total_amount is the sum of the captured line prices, never recomputed
      from live catalog prices
    - Status transitions: pending_deposit -> paid -> shipping -> completed,
      any non-terminal status -> cancelled
    - Bank info is a snapshot taken at creation time
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_user_id', 'user_id'),
        Index('ix_orders_status', 'status'),
        Index('ix_orders_created_at', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Opaque order identifier"
    )

    user_id: str = Field(
        description="Buyer (owning user) ID"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Sum of captured line prices"
    )

    payment_method: PaymentMethod = Field(
        default=PaymentMethod.BANK_TRANSFER,
        description="Payment method (bank transfer only)"
    )

    depositor_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Name the buyer will deposit under (used for manual matching)"
    )

    status: OrderStatus = Field(
        default=OrderStatus.PENDING_DEPOSIT,
        description="Order status"
    )

    shipping_recipient: str = Field(sa_column=Column(String(100), nullable=False))
    shipping_phone: str = Field(sa_column=Column(String(50), nullable=False))
    shipping_address: str = Field(sa_column=Column(String(255), nullable=False))
    shipping_detail_address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True)
    )
    shipping_zip_code: str = Field(sa_column=Column(String(20), nullable=False))

    bank_name: str = Field(sa_column=Column(String(100), nullable=False))
    bank_account_number: str = Field(sa_column=Column(String(50), nullable=False))
    bank_account_holder: str = Field(sa_column=Column(String(100), nullable=False))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Order creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def can_transition_to(self, to_status: OrderStatus) -> bool:
        return can_transition(self.status, to_status)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "4f6c1b9e-2f0a-4a55-9d4e-0d6f1c2b7a10",
                "user_id": "u-1001",
                "total_amount": "150000.00",
                "payment_method": "bank_transfer",
                "depositor_name": "Kim Minji",
                "status": "pending_deposit",
                "shipping_recipient": "Kim Minji",
                "shipping_phone": "010-1234-5678",
                "shipping_address": "7 Munhwajeondang-ro 23beon-gil, Dong-gu, Gwangju",
                "shipping_detail_address": "2F 202",
                "shipping_zip_code": "61485",
                "bank_name": "Shinhan Bank",
                "bank_account_number": "110-123-456789",
                "bank_account_holder": "Arts Factory Co., Ltd.",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
