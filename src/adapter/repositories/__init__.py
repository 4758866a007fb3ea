from .order_repository import SqlAlchemyOrderRepository
from .subscription_repository import SqlAlchemySubscriptionRepository
from .subscription_deposit_repository import SqlAlchemySubscriptionDepositRepository

__all__ = [
    "SqlAlchemyOrderRepository",
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemySubscriptionDepositRepository",
]
