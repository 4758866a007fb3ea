"""
List Admin Subscriptions Use Case

All subscriptions, newest first, with deposit history and display data.
"""
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.catalog_gateway import CatalogGateway
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.subscription_deposit_repository import SubscriptionDepositRepository
from src.app.use_cases.access import require_admin
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.reporting import buyer_display, item_title
from .dtos import ListAdminSubscriptionsResponseDTO, AdminSubscriptionDTO

logger = logging.getLogger(__name__)


class ListAdminSubscriptions:

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        deposit_repo: SubscriptionDepositRepository,
        catalog_gateway: CatalogGateway,
        identity_gateway: IdentityGateway,
    ):
        self.subscription_repo = subscription_repo
        self.deposit_repo = deposit_repo
        self.catalog_gateway = catalog_gateway
        self.identity_gateway = identity_gateway

    async def execute(self, actor_id: Optional[str]) -> Result[ListAdminSubscriptionsResponseDTO]:
        admin_result = await require_admin(self.identity_gateway, actor_id)
        if admin_result.is_err():
            return admin_result

        try:
            return Return.ok(await self._load())
        except Exception as e:
            logger.exception("Failed to list subscriptions")
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to list subscriptions",
                    reason=str(e),
                )
            )

    async def _load(self) -> ListAdminSubscriptionsResponseDTO:
        subscriptions = await self.subscription_repo.list_all()
        deposits = await self.deposit_repo.get_for_subscriptions([s.id for s in subscriptions])
        users = await self.identity_gateway.get_users(sorted({s.user_id for s in subscriptions}))
        artworks = await self.catalog_gateway.get_items(sorted({s.artwork_id for s in subscriptions}))

        dtos = []
        for subscription in subscriptions:
            buyer_name, buyer_email = buyer_display(users, subscription.user_id)
            dtos.append(
                AdminSubscriptionDTO.from_entity(
                    subscription,
                    deposits.get(subscription.id, []),
                    buyer_name=buyer_name,
                    buyer_email=buyer_email,
                    artwork_title=item_title(artworks, subscription.artwork_id),
                )
            )

        return ListAdminSubscriptionsResponseDTO(subscriptions=dtos, total=len(dtos))
