"""Data Transfer Objects for Order Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.services.identity_gateway import ShippingAddressDTO
from src.app.use_cases.subscriptions.dtos import SubscriptionDTO
from src.domain.order import Order
from src.domain.order_item import OrderItem, LineItemType


class LineItemCommandDTO(BaseModel):
    """One requested checkout line"""

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
        description="Price shown to the buyer at checkout (captured as-is)"
    )

    item_type: LineItemType = Field(
        ...,
        description="purchase or rental"
    )


class CreateOrderCommandDTO(BaseModel):
    """
    Command DTO for creating an order

    Used as input to CreateOrder use case. An empty items list is accepted here
    and rejected by the use case with EMPTY_ORDER.
    """

    actor_id: Optional[str] = Field(
        default=None,
        description="Authenticated buyer ID"
    )

    items: List[LineItemCommandDTO] = Field(
        default_factory=list,
        description="Checkout lines in display order"
    )

    depositor_name: str = Field(
        ...,
        min_length=1,
        description="Name the bank transfer will be sent under"
    )

    shipping_address: ShippingAddressDTO

    save_address: bool = Field(
        default=False,
        description="Also store the shipping address on the buyer's profile"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "actor_id": "u-1001",
                "items": [
                    {"artwork_id": "art-2001", "price": "100000", "item_type": "purchase"},
                    {"artwork_id": "art-2002", "price": "50000", "item_type": "rental"}
                ],
                "depositor_name": "Kim Minji",
                "shipping_address": {
                    "recipient": "Kim Minji",
                    "phone": "010-1234-5678",
                    "address": "7 Munhwajeondang-ro 23beon-gil, Dong-gu, Gwangju",
                    "detail_address": "2F 202",
                    "zip_code": "61485"
                },
                "save_address": True
            }
        }


class BankInfoDTO(BaseModel):
    """Bank account the buyer must transfer to"""

    bank_name: str
    account_number: str
    account_holder: str


class OrderItemDTO(BaseModel):
    line_index: int
    artwork_id: str
    price: Decimal
    item_type: str

    @classmethod
    def from_entity(cls, item: OrderItem, **extra) -> "OrderItemDTO":
        return cls(
            line_index=item.line_index,
            artwork_id=item.artwork_id,
            price=item.price,
            item_type=item.item_type.value,
            **extra,
        )


class OrderDTO(BaseModel):
    """
    Response DTO for an order with its line items

    Returned by CreateOrder, ConfirmDeposit, UpdateOrder.
    """

    id: str = Field(..., description="Order ID")
    user_id: str = Field(..., description="Buyer ID")
    items: List[OrderItemDTO] = Field(..., description="Captured line items")
    total_amount: Decimal = Field(..., description="Sum of captured line prices")
    payment_method: str
    depositor_name: str
    status: str = Field(..., description="pending_deposit, paid, shipping, completed or cancelled")
    shipping_address: ShippingAddressDTO
    bank_info: BankInfoDTO
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order, order_items: List[OrderItem], **extra) -> "OrderDTO":
        fields = dict(
            id=order.id,
            user_id=order.user_id,
            items=[OrderItemDTO.from_entity(item) for item in sorted(order_items, key=lambda i: i.line_index)],
            total_amount=order.total_amount,
            payment_method=order.payment_method.value,
            depositor_name=order.depositor_name,
            status=order.status.value,
            shipping_address=ShippingAddressDTO(
                recipient=order.shipping_recipient,
                phone=order.shipping_phone,
                address=order.shipping_address,
                detail_address=order.shipping_detail_address,
                zip_code=order.shipping_zip_code,
            ),
            bank_info=BankInfoDTO(
                bank_name=order.bank_name,
                account_number=order.bank_account_number,
                account_holder=order.bank_account_holder,
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        fields.update(extra)
        return cls(**fields)


class CreateOrderResponseDTO(BaseModel):
    order: OrderDTO
    bank_info: BankInfoDTO


class ConfirmDepositResponseDTO(BaseModel):
    order: OrderDTO
    subscriptions: List[SubscriptionDTO]


class UpdateOrderCommandDTO(BaseModel):
    """
    Enumerated admin corrections to an order

    Only the fields declared here can be changed; anything else is rejected.
    Status, items, total and the bank snapshot are not editable.
    """

    depositor_name: Optional[str] = Field(default=None, min_length=1)
    shipping_address: Optional[ShippingAddressDTO] = None

    def has_changes(self) -> bool:
        return self.depositor_name is not None or self.shipping_address is not None

    class Config:
        extra = "forbid"


class AdminOrderItemDTO(OrderItemDTO):
    artwork_title: str


class AdminOrderDTO(OrderDTO):
    """Order joined with buyer and catalog display data"""

    items: List[AdminOrderItemDTO]
    buyer_name: str
    buyer_email: Optional[str] = None


class ListAdminOrdersResponseDTO(BaseModel):
    orders: List[AdminOrderDTO]
    total: int
