"""Subscription Deposit Domain Entity

Append-only audit trail of payments recorded against a subscription.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid

INITIAL_DEPOSIT_NOTE = "initial deposit confirmed"


class SubscriptionDeposit(BaseModel, table=True):
    """
    Subscription Deposit - One confirmed payment

    Domain Rules:
    - Immutable once written
    - sequence is 1-based and unique per subscription (serializes appends)
    - confirmed_by records the confirming administrator
    """

    __tablename__ = "subscription_deposits"
    __table_args__ = (
        UniqueConstraint('subscription_id', 'sequence', name='uq_subscription_deposits_sequence'),
        Index('ix_subscription_deposits_subscription_id', 'subscription_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    subscription_id: str = Field(
        sa_column=Column(String(36), ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Subscription"
    )

    sequence: int = Field(description="Position in the deposit history (1-based)")

    deposited_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the deposit was confirmed"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Deposited amount"
    )

    confirmed_by: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Administrator who confirmed the deposit"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True)
    )
