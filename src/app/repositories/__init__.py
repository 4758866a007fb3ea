from .order_repository import OrderRepository
from .subscription_repository import SubscriptionRepository
from .subscription_deposit_repository import SubscriptionDepositRepository

__all__ = [
    "OrderRepository",
    "SubscriptionRepository",
    "SubscriptionDepositRepository",
]
