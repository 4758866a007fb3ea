"""UpdateOrder Use Case

Admin corrections to an order through an enumerated set of fields.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.order_repository import OrderRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from .dtos import UpdateOrderCommandDTO, OrderDTO

logger = logging.getLogger(__name__)


class UpdateOrder:
    """
    Use Case: Correct depositor name or shipping address of an order

    Business Rules:
    1. Admin only
    2. Only fields declared on UpdateOrderCommandDTO can change
    3. Completed or cancelled orders are read-only
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        identity_gateway: IdentityGateway,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.identity_gateway = identity_gateway

    async def execute(
        self, actor_id: Optional[str], order_id: str, command: UpdateOrderCommandDTO
    ) -> Result[OrderDTO]:
        try:
            admin_result = await require_admin(self.identity_gateway, actor_id)
            if admin_result.is_err():
                return admin_result

            if not command.has_changes():
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="No fields to update",
                        reason="depositor_name and shipping_address are both empty",
                    )
                )

            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=ErrorCode.NOT_FOUND,
                        message=f"Order not found: {order_id}",
                        reason=f"order_id={order_id}",
                    )
                )

            if order.is_terminal():
                current_status = order.status.value
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_STATE,
                        message=f"Order is {current_status} and can no longer be edited",
                        reason=f"order_id={order_id}, status={current_status}",
                    )
                )

            if command.depositor_name is not None:
                order.depositor_name = command.depositor_name

            if command.shipping_address is not None:
                address = command.shipping_address
                order.shipping_recipient = address.recipient
                order.shipping_phone = address.phone
                order.shipping_address = address.address
                order.shipping_detail_address = address.detail_address
                order.shipping_zip_code = address.zip_code

            order.updated_at = datetime.utcnow()
            updated = await self.order_repo.update(order)
            items = await self.order_repo.get_items(order_id)

            await self.uow.commit()

            logger.info(f"Order {order_id} updated by {admin_result.value.email}")
            return Return.ok(OrderDTO.from_entity(updated, items))

        except Exception as e:
            logger.exception(f"Failed to update order {order_id}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to update order",
                    reason=str(e),
                )
            )
