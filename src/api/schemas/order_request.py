"""Request schemas for Order API

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.order_item import LineItemType


class ShippingAddressSchema(BaseModel):
    recipient: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    detail_address: Optional[str] = None
    zip_code: str = Field(..., min_length=1)


class LineItemSchema(BaseModel):
    artwork_id: str = Field(
        ...,
        min_length=1,
        description="Catalog item ID"
    )

    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=2,
        description="Price displayed at checkout"
    )

    type: LineItemType = Field(
        ...,
        description="purchase or rental"
    )


class CreateOrderRequestSchema(BaseModel):
    """
    Request schema for checkout

    Used for POST /orders endpoint.
    """

    items: List[LineItemSchema] = Field(
        default_factory=list,
        description="Checkout lines"
    )

    depositor_name: str = Field(
        ...,
        min_length=1,
        description="Name the bank transfer will be sent under"
    )

    shipping_address: ShippingAddressSchema

    save_address: bool = Field(
        default=False,
        description="Store the address on the buyer's profile"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {"artwork_id": "art-2001", "price": "100000", "type": "purchase"},
                    {"artwork_id": "art-2002", "price": "50000", "type": "rental"}
                ],
                "depositor_name": "Kim Minji",
                "shipping_address": {
                    "recipient": "Kim Minji",
                    "phone": "010-1234-5678",
                    "address": "7 Munhwajeondang-ro 23beon-gil, Dong-gu, Gwangju",
                    "detail_address": "2F 202",
                    "zip_code": "61485"
                },
                "save_address": False
            }
        }


class UpdateOrderRequestSchema(BaseModel):
    """
    Request schema for admin order corrections

    Used for PATCH /admin/orders/{order_id}. Unknown fields are rejected.
    """

    depositor_name: Optional[str] = Field(default=None, min_length=1)
    shipping_address: Optional[ShippingAddressSchema] = None

    class Config:
        extra = "forbid"
