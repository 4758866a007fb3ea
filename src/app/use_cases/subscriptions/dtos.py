"""Data Transfer Objects for Subscription Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.subscription import Subscription
from src.domain.subscription_deposit import SubscriptionDeposit


class DepositEntryDTO(BaseModel):
    """One entry of a subscription's deposit history"""

    sequence: int
    deposited_at: datetime
    amount: Decimal
    confirmed_by: str
    note: Optional[str] = None

    @classmethod
    def from_entity(cls, deposit: SubscriptionDeposit) -> "DepositEntryDTO":
        return cls(
            sequence=deposit.sequence,
            deposited_at=deposit.deposited_at,
            amount=deposit.amount,
            confirmed_by=deposit.confirmed_by,
            note=deposit.note,
        )


class SubscriptionDTO(BaseModel):
    """
    Response DTO for a subscription with its deposit history

    Returned by ConfirmDeposit, AppendDeposit and the listing use cases.
    """

    id: str = Field(..., description="Subscription ID")
    user_id: str = Field(..., description="Renting user ID")
    artwork_id: str = Field(..., description="Rented catalog item ID")
    order_id: str = Field(..., description="Originating order ID")
    line_item_index: int = Field(..., description="Line of the originating order")
    status: str = Field(..., description="pending_approve, active, overdue or ended")
    billing_cycle: str = Field(..., description="monthly or yearly")
    start_date: datetime
    end_date: datetime
    next_payment_due: datetime
    monthly_fee: Decimal
    deposit_history: List[DepositEntryDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, subscription: Subscription, deposits: List[SubscriptionDeposit], **extra
    ) -> "SubscriptionDTO":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            artwork_id=subscription.artwork_id,
            order_id=subscription.order_id,
            line_item_index=subscription.line_item_index,
            status=subscription.status.value,
            billing_cycle=subscription.billing_cycle.value,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
            next_payment_due=subscription.next_payment_due,
            monthly_fee=subscription.monthly_fee,
            deposit_history=[
                DepositEntryDTO.from_entity(deposit)
                for deposit in sorted(deposits, key=lambda d: d.sequence)
            ],
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
            **extra,
        )

    class Config:
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
                "monthly_fee": "50000.00",
                "deposit_history": [
                    {
                        "sequence": 1,
                        "deposited_at": "2024-01-31T09:00:00Z",
                        "amount": "50000.00",
                        "confirmed_by": "admin@artsfactory.kr",
                        "note": "initial deposit confirmed"
                    }
                ],
                "created_at": "2024-01-31T09:00:00Z",
                "updated_at": "2024-01-31T09:00:00Z"
            }
        }


class AdminSubscriptionDTO(SubscriptionDTO):
    """Subscription joined with buyer and catalog display data"""

    buyer_name: str
    buyer_email: Optional[str] = None
    artwork_title: str


class ListAdminSubscriptionsResponseDTO(BaseModel):
    subscriptions: List[AdminSubscriptionDTO]
    total: int


class AppendDepositCommandDTO(BaseModel):
    """
    Command DTO for recording a deposit against a subscription

    Used as input to AppendDeposit use case.
    """

    actor_id: Optional[str] = Field(
        default=None,
        description="Confirming administrator ID"
    )

    subscription_id: str = Field(
        ...,
        description="Subscription to record the deposit against"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=2,
        description="Deposited amount (must be > 0)"
    )

    note: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Optional audit note"
    )

    advance_period: bool = Field(
        default=False,
        description="Renewal payment: advance end_date and next_payment_due by one billing cycle"
    )


class ListDueSubscriptionsResponseDTO(BaseModel):
    as_of: datetime
    subscriptions: List[SubscriptionDTO]
    total: int
