"""Admin Subscription API Routes"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.subscription_request import AppendDepositRequestSchema
from src.app.use_cases.subscriptions.dtos import (
    AppendDepositCommandDTO,
    ListAdminSubscriptionsResponseDTO,
    ListDueSubscriptionsResponseDTO,
    SubscriptionDTO,
)
from src.app.use_cases.subscriptions.append_deposit import AppendDeposit
from src.app.use_cases.subscriptions.list_admin_subscriptions import ListAdminSubscriptions
from src.app.use_cases.subscriptions.list_due_subscriptions import ListDueSubscriptions
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.subscription_deposit_repository import SqlAlchemySubscriptionDepositRepository
from src.adapter.services.catalog_gateway import SqlAlchemyCatalogGateway
from src.adapter.services.identity_gateway import SqlAlchemyIdentityGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_actor_id
from src.api.error import ClientError

router = APIRouter(prefix="/admin/subscriptions", tags=["Admin Subscriptions"])


@router.get(
    "",
    response_model=ListAdminSubscriptionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_subscriptions(
    actor_id: Optional[str] = Depends(get_actor_id),
    session: AsyncSession = Depends(get_session),
):
    """List all subscriptions, newest first, with deposit history."""
    use_case = ListAdminSubscriptions(
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        deposit_repo=SqlAlchemySubscriptionDepositRepository(session),
        catalog_gateway=SqlAlchemyCatalogGateway(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )
    result = await use_case.execute(actor_id)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value


@router.get(
    "/due",
    response_model=ListDueSubscriptionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_due_subscriptions(
    as_of: Optional[datetime] = Query(default=None, description="Cutoff (defaults to now, UTC)"),
    actor_id: Optional[str] = Depends(get_actor_id),
    session: AsyncSession = Depends(get_session),
):
    """Active or overdue subscriptions whose next payment is due by `as_of`."""
    use_case = ListDueSubscriptions(
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        deposit_repo=SqlAlchemySubscriptionDepositRepository(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )
    result = await use_case.execute(actor_id, as_of)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value


@router.post(
    "/{subscription_id}/deposits",
    response_model=SubscriptionDTO,
    status_code=status.HTTP_201_CREATED,
)
async def append_deposit(
    subscription_id: str,
    request: AppendDepositRequestSchema,
    actor_id: Optional[str] = Depends(get_actor_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Record a deposit against a subscription.

    With `advance_period` the billing period moves forward one cycle.

    **Returns:**
    - 201: Subscription with updated deposit history
    - 404: Subscription not found
    - 409: Subscription has ended
    """
    command = AppendDepositCommandDTO(
        actor_id=actor_id,
        subscription_id=subscription_id,
        amount=request.amount,
        note=request.note,
        advance_period=request.advance_period,
    )

    use_case = AppendDeposit(
        uow=SqlAlchemyUnitOfWork(session),
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        deposit_repo=SqlAlchemySubscriptionDepositRepository(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error, include_reason=True)

    return result.value
