"""
List Admin Orders Use Case

All orders, newest first, joined with buyer and catalog display data.
"""
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.catalog_gateway import CatalogGateway
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.order_repository import OrderRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.reporting import buyer_display, item_title
from .dtos import ListAdminOrdersResponseDTO, AdminOrderDTO, AdminOrderItemDTO

logger = logging.getLogger(__name__)


class ListAdminOrders:
    """
    Use case: Admin order list

    Read-only. A buyer or artwork removed since the order was placed is
    shown with a placeholder.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog_gateway: CatalogGateway,
        identity_gateway: IdentityGateway,
    ):
        self.order_repo = order_repo
        self.catalog_gateway = catalog_gateway
        self.identity_gateway = identity_gateway

    async def execute(self, actor_id: Optional[str]) -> Result[ListAdminOrdersResponseDTO]:
        admin_result = await require_admin(self.identity_gateway, actor_id)
        if admin_result.is_err():
            return admin_result

        try:
            return Return.ok(await self._load())
        except Exception as e:
            logger.exception("Failed to list orders")
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to list orders",
                    reason=str(e),
                )
            )

    async def _load(self) -> ListAdminOrdersResponseDTO:
        orders = await self.order_repo.list_all()
        items_by_order = await self.order_repo.get_items_for_orders([order.id for order in orders])

        user_ids = sorted({order.user_id for order in orders})
        artwork_ids = sorted({
            item.artwork_id
            for items in items_by_order.values()
            for item in items
        })
        users = await self.identity_gateway.get_users(user_ids)
        artworks = await self.catalog_gateway.get_items(artwork_ids)

        order_dtos = []
        for order in orders:
            items = items_by_order.get(order.id, [])
            buyer_name, buyer_email = buyer_display(users, order.user_id)
            order_dtos.append(
                AdminOrderDTO.from_entity(
                    order,
                    items,
                    items=[
                        AdminOrderItemDTO.from_entity(item, artwork_title=item_title(artworks, item.artwork_id))
                        for item in sorted(items, key=lambda i: i.line_index)
                    ],
                    buyer_name=buyer_name,
                    buyer_email=buyer_email,
                )
            )

        return ListAdminOrdersResponseDTO(orders=order_dtos, total=len(order_dtos))
