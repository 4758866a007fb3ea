"""ConfirmDeposit Use Case

Admin confirms that an order's bank transfer arrived. The order moves to
paid and every rental line becomes an active subscription, in one unit of
work.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.identity_gateway import IdentityGateway
from src.app.services.notification_service import NotificationService
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.subscription_deposit_repository import SubscriptionDepositRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.subscriptions.dtos import SubscriptionDTO
from src.domain.order import OrderStatus
from src.domain.subscription import Subscription, BillingCycle
from src.domain.subscription_deposit import SubscriptionDeposit, INITIAL_DEPOSIT_NOTE
from .dtos import ConfirmDepositResponseDTO, OrderDTO

logger = logging.getLogger(__name__)


class ConfirmDeposit:
    """
    Use Case: Confirm an order's deposit and start rental subscriptions

    Business Rules:
    1. Admin only
    2. Order must be pending_deposit; this guard is the idempotency boundary
    3. Status change is a compare-and-set (pending_deposit -> paid) after a
       row-locking read, so concurrent duplicates produce one success
    4. One subscription per rental line, unique on (order_id, line_item_index)
    5. Order transition and subscriptions commit together or not at all

    Flow:
    1. Authorize admin
    2. Load order with lock, check status
    3. Transition to paid (guarded)
    4. Create subscription + initial deposit per rental line
    5. Commit transaction
    6. Notify (best effort)
    7. Return order and subscriptions
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        subscription_repo: SubscriptionRepository,
        deposit_repo: SubscriptionDepositRepository,
        identity_gateway: IdentityGateway,
        notification_service: Optional[NotificationService] = None,
        billing_cycle: BillingCycle = BillingCycle.MONTHLY,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.subscription_repo = subscription_repo
        self.deposit_repo = deposit_repo
        self.identity_gateway = identity_gateway
        self.notification_service = notification_service
        self.billing_cycle = billing_cycle

    async def execute(self, actor_id: Optional[str], order_id: str) -> Result[ConfirmDepositResponseDTO]:
        """
        Execute deposit confirmation

        Args:
            actor_id: Confirming administrator ID
            order_id: Order whose deposit arrived

        Returns:
            Result[ConfirmDepositResponseDTO]: Paid order and created subscriptions, or error
        """
        try:
            # Step 1: Authorize admin
            admin_result = await require_admin(self.identity_gateway, actor_id)
            if admin_result.is_err():
                return admin_result
            admin = admin_result.value

            # Step 2: Load order with pessimistic lock
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

            current_status = order.status
            if current_status != OrderStatus.PENDING_DEPOSIT:
                await self.uow.rollback()
                return self._invalid_state(order_id, current_status.value)

            # Step 3: Guarded transition (loses cleanly to a concurrent confirm)
            transitioned = await self.order_repo.transition_status(
                order_id, OrderStatus.PENDING_DEPOSIT, OrderStatus.PAID
            )
            if not transitioned:
                await self.uow.rollback()
                return self._invalid_state(order_id, "changed concurrently")
            order.status = OrderStatus.PAID

            # Step 4: Subscriptions for rental lines
            now = datetime.utcnow()
            items = await self.order_repo.get_items(order_id)
            created = []
            for item in items:
                if not item.is_rental():
                    continue

                subscription = await self.subscription_repo.create(
                    Subscription.start(
                        user_id=order.user_id,
                        artwork_id=item.artwork_id,
                        order_id=order.id,
                        line_item_index=item.line_index,
                        monthly_fee=item.price,
                        billing_cycle=self.billing_cycle,
                        now=now,
                    )
                )
                deposit = await self.deposit_repo.create(
                    SubscriptionDeposit(
                        subscription_id=subscription.id,
                        sequence=1,
                        deposited_at=now,
                        amount=item.price,
                        confirmed_by=admin.email,
                        note=INITIAL_DEPOSIT_NOTE,
                    )
                )
                created.append((subscription, [deposit]))

            # Step 5: Commit transaction
            await self.uow.commit()

        except IntegrityError as e:
            # Another confirmation already materialized this order's subscriptions
            await self.uow.rollback()
            logger.warning(f"Duplicate subscription rejected for order {order_id}: {e}")
            return self._invalid_state(order_id, "subscriptions already exist")

        except Exception as e:
            logger.exception(f"Failed to confirm deposit for order {order_id}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to confirm deposit",
                    reason=str(e),
                )
            )

        logger.info(
            f"Deposit confirmed for order {order_id} by {admin.email}: "
            f"{len(created)} subscription(s) created"
        )

        # Step 6: Notify (best effort, never affects the result)
        if self.notification_service:
            try:
                await self.notification_service.send_deposit_confirmed(
                    order, [subscription for subscription, _ in created]
                )
            except Exception as e:
                logger.error(f"Deposit notification failed for order {order_id}: {e}")

        # Step 7: Build response
        return Return.ok(
            ConfirmDepositResponseDTO(
                order=OrderDTO.from_entity(order, items),
                subscriptions=[
                    SubscriptionDTO.from_entity(subscription, deposits)
                    for subscription, deposits in created
                ],
            )
        )

    def _invalid_state(self, order_id: str, current: str) -> Result:
        return Return.err(
            Error(
                code=ErrorCode.INVALID_STATE,
                message="Order is not pending deposit",
                reason=f"order_id={order_id}, status={current}",
            )
        )
