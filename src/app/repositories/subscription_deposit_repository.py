"""Subscription Deposit Repository Interface

Append-only access to subscription deposit history.
"""

from abc import ABC, abstractmethod
from typing import Dict, List
from src.domain.subscription_deposit import SubscriptionDeposit


class SubscriptionDepositRepository(ABC):

    @abstractmethod
    async def create(self, deposit: SubscriptionDeposit) -> SubscriptionDeposit:
        """
        Append a deposit entry

        Raises:
            IntegrityError: If the (subscription_id, sequence) pair already exists
        """
        pass

    @abstractmethod
    async def get_by_subscription_id(self, subscription_id: str) -> List[SubscriptionDeposit]:
        """Deposit history of one subscription ordered by sequence"""
        pass

    @abstractmethod
    async def get_for_subscriptions(self, subscription_ids: List[str]) -> Dict[str, List[SubscriptionDeposit]]:
        """Deposit histories keyed by subscription_id"""
        pass

    @abstractmethod
    async def next_sequence(self, subscription_id: str) -> int:
        """Sequence number the next appended deposit must use"""
        pass
