"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    create() relies on the (order_id, line_item_index) unique constraint:
    a duplicate insert raises IntegrityError.
    """

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Raises:
            IntegrityError: If a subscription already exists for the same order line
        """
        pass

    @abstractmethod
    async def get_by_id(self, subscription_id: str, for_update: bool = False) -> Optional[Subscription]:
        """
        Retrieve subscription by ID

        Args:
            subscription_id: Subscription ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> List[Subscription]:
        """Subscriptions spawned by one order, by line_item_index"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Subscription]:
        """All subscriptions, newest first"""
        pass

    @abstractmethod
    async def get_due(self, as_of: datetime) -> List[Subscription]:
        """
        Active or overdue subscriptions with next_payment_due <= as_of

        Returns:
            Subscriptions ordered by next_payment_due ascending
        """
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        pass
