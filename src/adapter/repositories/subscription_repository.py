"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import Subscription, SubscriptionStatus


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Raises:
            IntegrityError: If the order line already has a subscription
        """
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def get_by_id(self, subscription_id: str, for_update: bool = False) -> Optional[Subscription]:
        statement = select(Subscription).where(Subscription.id == subscription_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_order_id(self, order_id: str) -> List[Subscription]:
        statement = (
            select(Subscription)
            .where(Subscription.order_id == order_id)
            .order_by(Subscription.line_item_index)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_all(self) -> List[Subscription]:
        statement = select(Subscription).order_by(
            Subscription.created_at.desc(), Subscription.line_item_index
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_due(self, as_of: datetime) -> List[Subscription]:
        statement = (
            select(Subscription)
            .where(
                Subscription.status.in_([SubscriptionStatus.ACTIVE, SubscriptionStatus.OVERDUE]),
                Subscription.next_payment_due <= as_of,
            )
            .order_by(Subscription.next_payment_due)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, subscription: Subscription) -> Subscription:
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
