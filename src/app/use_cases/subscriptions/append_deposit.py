"""AppendDeposit Use Case

Records a further deposit against a subscription (e.g. a monthly rental
payment) and optionally advances the billing period.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.subscription_deposit_repository import SubscriptionDepositRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from src.domain.subscription import SubscriptionStatus
from src.domain.subscription_deposit import SubscriptionDeposit
from .dtos import AppendDepositCommandDTO, SubscriptionDTO

logger = logging.getLogger(__name__)


class AppendDeposit:
    """
    Use Case: Append to a subscription's deposit history

    Business Rules:
    1. Admin only
    2. History is append-only; sequence numbers are consecutive and unique
    3. Ended subscriptions accept no further deposits
    4. advance_period moves end_date and next_payment_due forward one billing
       cycle and returns an overdue subscription to active
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        deposit_repo: SubscriptionDepositRepository,
        identity_gateway: IdentityGateway,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.deposit_repo = deposit_repo
        self.identity_gateway = identity_gateway

    async def execute(self, command: AppendDepositCommandDTO) -> Result[SubscriptionDTO]:
        """
        Execute deposit append

        Args:
            command: AppendDepositCommandDTO with subscription, amount, note

        Returns:
            Result[SubscriptionDTO]: Subscription with its full deposit history, or error
        """
        try:
            admin_result = await require_admin(self.identity_gateway, command.actor_id)
            if admin_result.is_err():
                return admin_result
            admin = admin_result.value

            subscription = await self.subscription_repo.get_by_id(
                command.subscription_id, for_update=True
            )
            if not subscription:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=ErrorCode.NOT_FOUND,
                        message=f"Subscription not found: {command.subscription_id}",
                        reason=f"subscription_id={command.subscription_id}",
                    )
                )

            if subscription.status == SubscriptionStatus.ENDED:
                subscription_id = subscription.id
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_STATE,
                        message="Subscription has ended",
                        reason=f"subscription_id={subscription_id}, status=ended",
                    )
                )

            now = datetime.utcnow()
            sequence = await self.deposit_repo.next_sequence(subscription.id)
            await self.deposit_repo.create(
                SubscriptionDeposit(
                    subscription_id=subscription.id,
                    sequence=sequence,
                    deposited_at=now,
                    amount=command.amount,
                    confirmed_by=admin.email,
                    note=command.note,
                )
            )

            if command.advance_period:
                subscription.renew(now)
            else:
                subscription.updated_at = now
            subscription = await self.subscription_repo.update(subscription)

            deposits = await self.deposit_repo.get_by_subscription_id(subscription.id)

            await self.uow.commit()

            logger.info(
                f"Deposit #{sequence} of {command.amount} recorded on subscription "
                f"{subscription.id} by {admin.email}"
            )
            return Return.ok(SubscriptionDTO.from_entity(subscription, deposits))

        except IntegrityError as e:
            await self.uow.rollback()
            logger.warning(f"Concurrent deposit append on {command.subscription_id}: {e}")
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_STATE,
                    message="Another deposit was recorded at the same time, retry",
                    reason=str(e),
                )
            )

        except Exception as e:
            logger.exception(f"Failed to append deposit to {command.subscription_id}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to record deposit",
                    reason=str(e),
                )
            )
