"""SQLAlchemy implementation of OrderRepository

Orders and their line items share one session/transaction. Status changes
are compare-and-set UPDATEs so concurrent transitions cannot both succeed.
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.order_repository import OrderRepository
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem


class SqlAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (ignored by SQLite)
    - Guarded status transitions (UPDATE ... WHERE status = :from_status)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        self.session.add(order)
        await self.session.flush()
        for item in items:
            item.order_id = order.id
            self.session.add(item)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def get_by_id(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID with optional row-level locking

        Args:
            order_id: Order ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Order if found, None otherwise
        """
        stmt = select(Order).where(Order.id == order_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_items(self, order_id: str) -> List[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.line_index)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_items_for_orders(self, order_ids: List[str]) -> Dict[str, List[OrderItem]]:
        if not order_ids:
            return {}

        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.order_id, OrderItem.line_index)
        )
        result = await self.session.execute(stmt)

        grouped: Dict[str, List[OrderItem]] = defaultdict(list)
        for item in result.scalars().all():
            grouped[item.order_id].append(item)
        return dict(grouped)

    async def list_all(self) -> List[Order]:
        stmt = select(Order).order_by(Order.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def transition_status(
        self, order_id: str, from_status: OrderStatus, to_status: OrderStatus
    ) -> bool:
        """
        Compare-and-set the order status

        The WHERE clause on the current status makes the check and the write
        one statement; rowcount tells whether this caller won.
        """
        stmt = (
            update(Order)
            .where(Order.id == order_id, Order.status == from_status)
            .values(status=to_status, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def update(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order
