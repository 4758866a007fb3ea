"""CreateOrder Use Case

Turns a buyer's checkout request into a pending_deposit order paid by
manual bank transfer.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.catalog_gateway import CatalogGateway
from src.app.services.identity_gateway import IdentityGateway
from src.app.repositories.order_repository import OrderRepository
from src.app.use_cases.access import require_actor
from src.app.use_cases.errors import ErrorCode
from src.domain.order import Order, OrderStatus, PaymentMethod
from src.domain.order_item import OrderItem
from .dtos import CreateOrderCommandDTO, CreateOrderResponseDTO, BankInfoDTO, OrderDTO

logger = logging.getLogger(__name__)


class CreateOrder:
    """
    Use Case: Create an order from checkout

    Business Rules:
    1. Actor must resolve to a known user
    2. At least one line item
    3. Every item must exist and be sellable (approved) right now
    4. Total is the sum of the prices the buyer saw, not re-fetched prices
    5. Bank info is snapshotted onto the order
    6. Nothing is written unless every check passes

    Flow:
    1. Resolve actor
    2. Validate items against the catalog
    3. Create order + line items
    4. Optionally save the shipping address to the buyer's profile
    5. Commit transaction
    6. Return order and bank info
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        catalog_gateway: CatalogGateway,
        identity_gateway: IdentityGateway,
        bank_info: BankInfoDTO,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.catalog_gateway = catalog_gateway
        self.identity_gateway = identity_gateway
        self.bank_info = bank_info

    async def execute(self, command: CreateOrderCommandDTO) -> Result[CreateOrderResponseDTO]:
        """
        Execute order creation

        Args:
            command: CreateOrderCommandDTO with actor, items, depositor and address

        Returns:
            Result[CreateOrderResponseDTO]: Created order with bank info, or error
        """
        try:
            # Step 1: Resolve actor
            actor_result = await require_actor(self.identity_gateway, command.actor_id)
            if actor_result.is_err():
                return actor_result
            actor = actor_result.value

            # Step 2: Validate items before any write
            if not command.items:
                return Return.err(
                    Error(
                        code=ErrorCode.EMPTY_ORDER,
                        message="No items in order",
                        reason="items is empty",
                    )
                )

            for line in command.items:
                item = await self.catalog_gateway.get_item(line.artwork_id)
                if item is None:
                    return Return.err(
                        Error(
                            code=ErrorCode.ITEM_UNAVAILABLE,
                            message=f"Artwork not found: {line.artwork_id}",
                            reason=f"artwork_id={line.artwork_id}",
                        )
                    )
                if not item.is_sellable:
                    return Return.err(
                        Error(
                            code=ErrorCode.ITEM_UNAVAILABLE,
                            message=f"Artwork not available: {item.title}",
                            reason=f"artwork_id={line.artwork_id}",
                        )
                    )

            # Step 3: Create order with captured prices
            total_amount = sum((line.price for line in command.items), Decimal("0"))
            address = command.shipping_address

            order = Order(
                user_id=actor.id,
                total_amount=total_amount,
                payment_method=PaymentMethod.BANK_TRANSFER,
                depositor_name=command.depositor_name,
                status=OrderStatus.PENDING_DEPOSIT,
                shipping_recipient=address.recipient,
                shipping_phone=address.phone,
                shipping_address=address.address,
                shipping_detail_address=address.detail_address,
                shipping_zip_code=address.zip_code,
                bank_name=self.bank_info.bank_name,
                bank_account_number=self.bank_info.account_number,
                bank_account_holder=self.bank_info.account_holder,
            )
            items = [
                OrderItem(
                    order_id=order.id,
                    line_index=index,
                    artwork_id=line.artwork_id,
                    price=line.price,
                    item_type=line.item_type,
                )
                for index, line in enumerate(command.items)
            ]

            created_order = await self.order_repo.create(order, items)

            # Step 4: Collaborator write, same transaction
            if command.save_address:
                await self.identity_gateway.save_shipping_address(actor.id, address)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Order {created_order.id} created for user {actor.id}: "
                f"{len(items)} item(s), total {total_amount}"
            )

            return Return.ok(
                CreateOrderResponseDTO(
                    order=OrderDTO.from_entity(created_order, items),
                    bank_info=self.bank_info,
                )
            )

        except Exception as e:
            logger.exception("Failed to create order")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PERSISTENCE_FAILURE,
                    message="Failed to create order",
                    reason=str(e),
                )
            )
