"""SQLAlchemy implementation of SubscriptionDepositRepository

Append-only; the unique (subscription_id, sequence) constraint rejects a
second writer that computed the same next sequence.
"""

from collections import defaultdict
from typing import Dict, List
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_deposit_repository import SubscriptionDepositRepository
from src.domain.subscription_deposit import SubscriptionDeposit


class SqlAlchemySubscriptionDepositRepository(SubscriptionDepositRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, deposit: SubscriptionDeposit) -> SubscriptionDeposit:
        self.session.add(deposit)
        await self.session.flush()
        await self.session.refresh(deposit)
        return deposit

    async def get_by_subscription_id(self, subscription_id: str) -> List[SubscriptionDeposit]:
        stmt = (
            select(SubscriptionDeposit)
            .where(SubscriptionDeposit.subscription_id == subscription_id)
            .order_by(SubscriptionDeposit.sequence)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_subscriptions(self, subscription_ids: List[str]) -> Dict[str, List[SubscriptionDeposit]]:
        if not subscription_ids:
            return {}

        stmt = (
            select(SubscriptionDeposit)
            .where(SubscriptionDeposit.subscription_id.in_(subscription_ids))
            .order_by(SubscriptionDeposit.subscription_id, SubscriptionDeposit.sequence)
        )
        result = await self.session.execute(stmt)

        grouped: Dict[str, List[SubscriptionDeposit]] = defaultdict(list)
        for deposit in result.scalars().all():
            grouped[deposit.subscription_id].append(deposit)
        return dict(grouped)

    async def next_sequence(self, subscription_id: str) -> int:
        stmt = select(func.coalesce(func.max(SubscriptionDeposit.sequence), 0)).where(
            SubscriptionDeposit.subscription_id == subscription_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) + 1
