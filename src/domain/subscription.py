"""Subscription Domain Entity

Recurring rental grant created for each rental line item when the order's
deposit is confirmed. Payments against it are recorded in
SubscriptionDeposit (append-only).
"""

from calendar import monthrange
from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class SubscriptionStatus(str, Enum):
    """Subscription status types"""
    PENDING_APPROVE = "pending_approve"
    ACTIVE = "active"
    OVERDUE = "overdue"
    ENDED = "ended"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


CYCLE_MONTHS = {
    BillingCycle.MONTHLY: 1,
    BillingCycle.YEARLY: 12,
}


def add_months(value: datetime, months: int) -> datetime:
    """Advance by calendar months, clamping the day to the target month's length"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = monthrange(year, month)
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def advance_period(value: datetime, cycle: BillingCycle) -> datetime:
    return add_months(value, CYCLE_MONTHS[cycle])


class Subscription(BaseModel, table=True):
    """
    Subscription - Rental grant with billing schedule

    Domain Rules:
    - Exactly one subscription per (order_id, line_item_index)
    - order_id is set at creation and never changes
    - end_date = start_date advanced by one billing cycle at creation
    - next_payment_due tracks end_date of the current period
    - Never deleted; ENDED is terminal
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint('order_id', 'line_item_index', name='uq_subscriptions_order_line'),
        Index('ix_subscriptions_user_id', 'user_id'),
        Index('ix_subscriptions_status', 'status'),
        Index('ix_subscriptions_next_payment_due', 'next_payment_due'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    user_id: str = Field(description="Renting user ID")

    artwork_id: str = Field(description="Rented catalog item ID")

    order_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Originating order (immutable)"
    )

    line_item_index: int = Field(description="Line of the originating order")

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.ACTIVE,
        description="Subscription status"
    )

    billing_cycle: BillingCycle = Field(
        default=BillingCycle.MONTHLY,
        description="Billing recurrence"
    )

    start_date: datetime = Field(description="Start of the subscription")

    end_date: datetime = Field(description="End of the current billing period")

    next_payment_due: datetime = Field(description="When the next deposit is due")

    monthly_fee: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Fee captured from the order line"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def start(
        cls,
        user_id: str,
        artwork_id: str,
        order_id: str,
        line_item_index: int,
        monthly_fee: Decimal,
        billing_cycle: BillingCycle,
        now: datetime,
    ) -> "Subscription":
        end_date = advance_period(now, billing_cycle)
        return cls(
            user_id=user_id,
            artwork_id=artwork_id,
            order_id=order_id,
            line_item_index=line_item_index,
            status=SubscriptionStatus.ACTIVE,
            billing_cycle=billing_cycle,
            start_date=now,
            end_date=end_date,
            next_payment_due=end_date,
            monthly_fee=monthly_fee,
            created_at=now,
            updated_at=now,
        )

    def renew(self, now: datetime) -> None:
        """Advance the current period by one billing cycle"""
        self.end_date = advance_period(self.end_date, self.billing_cycle)
        self.next_payment_due = self.end_date
        if self.status == SubscriptionStatus.OVERDUE:
            self.status = SubscriptionStatus.ACTIVE
        self.updated_at = now

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "8b0f3c52-5d1e-4c8b-a0a7-2f4b1e9d6c33",
                "user_id": "u-1001",
                "artwork_id": "art-2002",
                "order_id": "4f6c1b9e-2f0a-4a55-9d4e-0d6f1c2b7a10",
                "line_item_index": 1,
                "status": "active",
                "billing_cycle": "monthly",
                "start_date": "2024-01-31T09:00:00Z",
                "end_date": "2024-02-29T09:00:00Z",
                "next_payment_due": "2024-02-29T09:00:00Z",
                "monthly_fee": "50000.00"
            }
        }
