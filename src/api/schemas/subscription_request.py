"""Request schemas for Subscription API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class AppendDepositRequestSchema(BaseModel):
    """
    Request schema for recording a subscription deposit

    Used for POST /admin/subscriptions/{subscription_id}/deposits endpoint.
    """

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
        description="Renewal payment: advance the billing period by one cycle"
    )

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "amount": "50000",
                "note": "February rental fee",
                "advance_period": True
            }
        }
