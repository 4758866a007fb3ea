from .base import BaseModel, generate_uuid
from .order import Order, OrderStatus, PaymentMethod, can_transition
from .order_item import OrderItem, LineItemType
from .subscription import Subscription, SubscriptionStatus, BillingCycle, advance_period
from .subscription_deposit import SubscriptionDeposit
from .artwork import Artwork, ArtworkStatus
from .user import User, UserRole

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "can_transition",
    "OrderItem",
    "LineItemType",
    "Subscription",
    "SubscriptionStatus",
    "BillingCycle",
    "advance_period",
    "SubscriptionDeposit",
    "Artwork",
    "ArtworkStatus",
    "User",
    "UserRole",
]
