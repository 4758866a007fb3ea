"""Unit tests for UpdateOrder use case"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from pydantic import ValidationError

from src.app.services.identity_gateway import ActorDTO, ShippingAddressDTO
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.orders.dtos import UpdateOrderCommandDTO
from src.app.use_cases.orders.update_order import UpdateOrder
from src.domain.order import Order, OrderStatus


ADMIN = ActorDTO(id="u-admin", email="admin@artsfactory.kr", name="Park Admin", role="admin")


def make_order(status: OrderStatus = OrderStatus.PAID) -> Order:
    return Order(
        id="o-1",
        user_id="u-buyer",
        total_amount=Decimal("150000"),
        depositor_name="Kim Minji",
        status=status,
        shipping_recipient="Kim Minji",
        shipping_phone="010-1234-5678",
        shipping_address="7 Munhwajeondang-ro",
        shipping_zip_code="61485",
        bank_name="Shinhan Bank",
        bank_account_number="110-123-456789",
        bank_account_holder="Arts Factory Co., Ltd.",
        created_at=datetime(2024, 1, 31),
        updated_at=datetime(2024, 1, 31),
    )


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_order())
    repo.update = AsyncMock(side_effect=lambda order: order)
    repo.get_items = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_identity():
    identity = MagicMock()
    identity.resolve_actor = AsyncMock(return_value=ADMIN)
    identity.is_admin = MagicMock(side_effect=lambda actor: actor.role == "admin")
    return identity


@pytest.fixture
def use_case(mock_uow, mock_order_repo, mock_identity):
    return UpdateOrder(uow=mock_uow, order_repo=mock_order_repo, identity_gateway=mock_identity)


@pytest.mark.asyncio
class TestUpdateOrder:

    async def test_updates_depositor_name_only(self, use_case, mock_order_repo, mock_uow):
        command = UpdateOrderCommandDTO(depositor_name="Kim M.")

        result = await use_case.execute("u-admin", "o-1", command)

        assert result.is_ok()
        assert result.value.depositor_name == "Kim M."
        assert result.value.shipping_address.zip_code == "61485"
        assert result.value.status == "paid"
        assert result.value.total_amount == Decimal("150000")
        mock_order_repo.update.assert_awaited_once()
        mock_uow.commit.assert_awaited_once()

    async def test_updates_shipping_address(self, use_case):
        command = UpdateOrderCommandDTO(
            shipping_address=ShippingAddressDTO(
                recipient="Kim Minji",
                phone="010-9999-0000",
                address="1 Jongno, Seoul",
                zip_code="03154",
            )
        )

        result = await use_case.execute("u-admin", "o-1", command)

        assert result.is_ok()
        assert result.value.shipping_address.address == "1 Jongno, Seoul"
        assert result.value.shipping_address.detail_address is None
        assert result.value.depositor_name == "Kim Minji"

    async def test_no_changes(self, use_case, mock_order_repo):
        result = await use_case.execute("u-admin", "o-1", UpdateOrderCommandDTO())

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        mock_order_repo.get_by_id.assert_not_awaited()

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    async def test_terminal_order_is_read_only(self, use_case, mock_order_repo, mock_uow, status):
        mock_order_repo.get_by_id = AsyncMock(return_value=make_order(status))

        result = await use_case.execute("u-admin", "o-1", UpdateOrderCommandDTO(depositor_name="X"))

        assert result.error.code == ErrorCode.INVALID_STATE
        mock_order_repo.update.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    async def test_not_found(self, use_case, mock_order_repo):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("u-admin", "o-x", UpdateOrderCommandDTO(depositor_name="X"))

        assert result.error.code == ErrorCode.NOT_FOUND

    async def test_non_admin(self, use_case, mock_identity):
        mock_identity.resolve_actor = AsyncMock(
            return_value=ActorDTO(id="u-buyer", email="minji@example.com", name="Kim Minji", role="user")
        )

        result = await use_case.execute("u-buyer", "o-1", UpdateOrderCommandDTO(depositor_name="X"))

        assert result.error.code == ErrorCode.FORBIDDEN


class TestUpdateOrderCommand:

    def test_rejects_fields_outside_the_editable_set(self):
        with pytest.raises(ValidationError):
            UpdateOrderCommandDTO(status="paid")

    def test_rejects_total_amount(self):
        with pytest.raises(ValidationError):
            UpdateOrderCommandDTO(depositor_name="Kim", total_amount="1")
