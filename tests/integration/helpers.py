"""Builders shared by integration tests"""

from decimal import Decimal
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.subscription_deposit_repository import SqlAlchemySubscriptionDepositRepository
from src.adapter.services.catalog_gateway import SqlAlchemyCatalogGateway
from src.adapter.services.identity_gateway import SqlAlchemyIdentityGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.identity_gateway import ShippingAddressDTO
from src.app.use_cases.orders.confirm_deposit import ConfirmDeposit
from src.app.use_cases.orders.create_order import CreateOrder
from src.app.use_cases.orders.dtos import BankInfoDTO, CreateOrderCommandDTO, LineItemCommandDTO

BANK_INFO = BankInfoDTO(
    bank_name="Shinhan Bank",
    account_number="110-123-456789",
    account_holder="Arts Factory Co., Ltd.",
)

SHIPPING = ShippingAddressDTO(
    recipient="Kim Minji",
    phone="010-1234-5678",
    address="7 Munhwajeondang-ro 23beon-gil, Dong-gu, Gwangju",
    detail_address="2F 202",
    zip_code="61485",
)


def create_order_use_case(session) -> CreateOrder:
    return CreateOrder(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyOrderRepository(session),
        catalog_gateway=SqlAlchemyCatalogGateway(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
        bank_info=BANK_INFO,
    )


def confirm_deposit_use_case(session) -> ConfirmDeposit:
    return ConfirmDeposit(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyOrderRepository(session),
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        deposit_repo=SqlAlchemySubscriptionDepositRepository(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
    )


def checkout_command(*lines, actor_id="u-buyer", save_address=False) -> CreateOrderCommandDTO:
    return CreateOrderCommandDTO(
        actor_id=actor_id,
        items=[
            LineItemCommandDTO(artwork_id=artwork_id, price=Decimal(price), item_type=item_type)
            for artwork_id, price, item_type in lines
        ],
        depositor_name="Kim Minji",
        shipping_address=SHIPPING,
        save_address=save_address,
    )


async def place_order(session, *lines):
    """Create an order through the use case and return its ID"""
    result = await create_order_use_case(session).execute(checkout_command(*lines))
    assert result.is_ok(), result.error
    return result.value.order.id
