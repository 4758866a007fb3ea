"""
List Due Subscriptions Use Case

Active or overdue subscriptions whose next payment is due by a given time.
Read-only; a scheduler or an admin decides what to do with them.
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.subscription_deposit_repository import SubscriptionDepositRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from .dtos import ListDueSubscriptionsResponseDTO, SubscriptionDTO

logger = logging.getLogger(__name__)


class ListDueSubscriptions:

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        deposit_repo: SubscriptionDepositRepository,
        identity_gateway: IdentityGateway,
    ):
        self.subscription_repo = subscription_repo
        self.deposit_repo = deposit_repo
        self.identity_gateway = identity_gateway

    async def execute(
        self, actor_id: Optional[str], as_of: Optional[datetime] = None
    ) -> Result[ListDueSubscriptionsResponseDTO]:
        """
        Args:
            actor_id: Requesting administrator ID
            as_of: Cutoff for next_payment_due (defaults to now)
        """
        admin_result = await require_admin(self.identity_gateway, actor_id)
        if admin_result.is_err():
            return admin_result

        as_of = as_of or datetime.utcnow()
        if as_of.tzinfo is not None:
            # stored timestamps are naive UTC
            as_of = as_of.astimezone(timezone.utc).replace(tzinfo=None)
        try:
            subscriptions = await self.subscription_repo.get_due(as_of)
            deposits = await self.deposit_repo.get_for_subscriptions([s.id for s in subscriptions])
        except Exception as e:
            logger.exception("Failed to list due subscriptions")
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to list due subscriptions",
                    reason=str(e),
                )
            )

        return Return.ok(
            ListDueSubscriptionsResponseDTO(
                as_of=as_of,
                subscriptions=[
                    SubscriptionDTO.from_entity(s, deposits.get(s.id, []))
                    for s in subscriptions
                ],
                total=len(subscriptions),
            )
        )
