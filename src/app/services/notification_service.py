"""Notification Service Interface

Defines the contract for announcing confirmed deposits.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.order import Order
from src.domain.subscription import Subscription


class NotificationService(ABC):
    """
    Abstract notification service for order events

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_deposit_confirmed(self, order: Order, subscriptions: List[Subscription]) -> bool:
        """
        Announce that an order's deposit was confirmed

        Args:
            order: The order that moved to paid
            subscriptions: Subscriptions created for its rental lines

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
