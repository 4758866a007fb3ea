"""Order domain use cases"""
from .create_order import CreateOrder
from .confirm_deposit import ConfirmDeposit
from .update_order import UpdateOrder
from .list_admin_orders import ListAdminOrders
from .dtos import (
    LineItemCommandDTO,
    CreateOrderCommandDTO,
    BankInfoDTO,
    OrderItemDTO,
    OrderDTO,
    CreateOrderResponseDTO,
    ConfirmDepositResponseDTO,
    UpdateOrderCommandDTO,
    AdminOrderItemDTO,
    AdminOrderDTO,
    ListAdminOrdersResponseDTO,
)

__all__ = [
    "CreateOrder",
    "ConfirmDeposit",
    "UpdateOrder",
    "ListAdminOrders",
    "LineItemCommandDTO",
    "CreateOrderCommandDTO",
    "BankInfoDTO",
    "OrderItemDTO",
    "OrderDTO",
    "CreateOrderResponseDTO",
    "ConfirmDepositResponseDTO",
    "UpdateOrderCommandDTO",
    "AdminOrderItemDTO",
    "AdminOrderDTO",
    "ListAdminOrdersResponseDTO",
]
