"""Order Repository Interface

Defines the contract for order and line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem


class OrderRepository(ABC):
    """
    Repository interface for Order persistence

    Line items are written together with their order and are never updated.
    Status changes go through transition_status, a guarded compare-and-set.
    """

    @abstractmethod
    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        """
        Persist a new order with its line items

        Args:
            order: Order entity to persist
            items: Line items in checkout order (order_id is assigned here)

        Returns:
            Created Order
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_items(self, order_id: str) -> List[OrderItem]:
        """Line items of one order ordered by line_index"""
        pass

    @abstractmethod
    async def get_items_for_orders(self, order_ids: List[str]) -> Dict[str, List[OrderItem]]:
        """Line items of many orders keyed by order_id"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Order]:
        """All orders, newest first"""
        pass

    @abstractmethod
    async def transition_status(
        self, order_id: str, from_status: OrderStatus, to_status: OrderStatus
    ) -> bool:
        """
        Atomically move an order from one status to another

        Args:
            order_id: Order ID
            from_status: Status the order must currently have
            to_status: New status

        Returns:
            True if exactly one row was transitioned, False if the order was
            not in from_status (e.g. a concurrent call won)
        """
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """Persist changes to editable order fields"""
        pass
