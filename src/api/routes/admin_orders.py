"""Admin Order API Routes

Order listing, enumerated corrections and deposit reconciliation.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.order_request import UpdateOrderRequestSchema
from src.app.services.notification_service import NotificationService
from src.app.use_cases.orders.dtos import (
    ConfirmDepositResponseDTO,
    ListAdminOrdersResponseDTO,
    OrderDTO,
    UpdateOrderCommandDTO,
)
from src.app.use_cases.orders.confirm_deposit import ConfirmDeposit
from src.app.use_cases.orders.list_admin_orders import ListAdminOrders
from src.app.use_cases.orders.update_order import UpdateOrder
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.subscription_deposit_repository import SqlAlchemySubscriptionDepositRepository
from src.adapter.services.catalog_gateway import SqlAlchemyCatalogGateway
from src.adapter.services.identity_gateway import SqlAlchemyIdentityGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_actor_id, get_notification_service, get_billing_cycle
from src.domain.subscription import BillingCycle
from src.api.error import ClientError

router = APIRouter(prefix="/admin/orders", tags=["Admin Orders"])


@router.get(
    "",
    response_model=ListAdminOrdersResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_orders(
    actor_id: Optional[str] = Depends(get_actor_id),
    session: AsyncSession = Depends(get_session),
):
    """
    List all orders, newest first, with buyer and artwork names.

    **Returns:**
    - 200: Orders
    - 401: No authenticated actor
    - 403: Actor is not an administrator
    """
    use_case = ListAdminOrders(
        order_repo=SqlAlchemyOrderRepository(session),
        catalog_gateway=SqlAlchemyCatalogGateway(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )
    result = await use_case.execute(actor_id)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value


@router.patch(
    "/{order_id}",
    response_model=OrderDTO,
    status_code=status.HTTP_200_OK,
)
async def update_order(
    order_id: str,
    request: UpdateOrderRequestSchema,
    actor_id: Optional[str] = Depends(get_actor_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Correct the depositor name or shipping address of an order.

    Only `depositor_name` and `shipping_address` are accepted; any other
    field is rejected with 422.

    **Returns:**
    - 200: Updated order
    - 400: Nothing to update
    - 404: Order not found
    - 409: Order is completed or cancelled
    """
    command = UpdateOrderCommandDTO(**request.model_dump(exclude_unset=True))

    use_case = UpdateOrder(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyOrderRepository(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )
    result = await use_case.execute(actor_id, order_id, command)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value


@router.post(
    "/{order_id}/confirm-deposit",
    response_model=ConfirmDepositResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        409: {
            "description": "Order is not pending deposit",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATE",
                            "message": "Order is not pending deposit"
                        }
                    }
                }
            }
        }
    }
)
async def confirm_deposit(
    order_id: str,
    actor_id: Optional[str] = Depends(get_actor_id),
    notification_service: NotificationService = Depends(get_notification_service),
    billing_cycle: BillingCycle = Depends(get_billing_cycle),
    session: AsyncSession = Depends(get_session),
):
    """
    Confirm that the bank transfer for an order arrived.

    Marks the order paid and starts one active subscription per rental line.
    Calling it again for the same order returns 409 and creates nothing.

    **Returns:**
    - 200: Order paid, subscriptions created
    - 403: Actor is not an administrator
    - 404: Order not found
    - 409: Order is not pending deposit
    """
    use_case = ConfirmDeposit(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyOrderRepository(session),
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        deposit_repo=SqlAlchemySubscriptionDepositRepository(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
        notification_service=notification_service,
        billing_cycle=billing_cycle,
    )
    result = await use_case.execute(actor_id, order_id)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value
