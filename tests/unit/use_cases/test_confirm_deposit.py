"""Unit tests for ConfirmDeposit use case

Tests cover:
- Paid order with one subscription per rental line
- Orders without rental lines produce no subscriptions
- Admin-only access
- Status guard and lost compare-and-set report INVALID_STATE
- Duplicate subscription constraint maps to INVALID_STATE
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from src.app.services.identity_gateway import ActorDTO
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.orders.confirm_deposit import ConfirmDeposit
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem, LineItemType
from src.domain.subscription import BillingCycle
from src.domain.subscription_deposit import INITIAL_DEPOSIT_NOTE


ADMIN = ActorDTO(id="u-admin", email="admin@artsfactory.kr", name="Park Admin", role="admin")
BUYER = ActorDTO(id="u-buyer", email="minji@example.com", name="Kim Minji", role="user")


def make_order(status: OrderStatus = OrderStatus.PENDING_DEPOSIT) -> Order:
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
        created_at=datetime(2024, 1, 31, 8, 0),
        updated_at=datetime(2024, 1, 31, 8, 0),
    )


def make_items(*lines):
    return [
        OrderItem(order_id="o-1", line_index=index, artwork_id=artwork_id, price=Decimal(price), item_type=item_type)
        for index, (artwork_id, price, item_type) in enumerate(lines)
    ]


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_order())
    repo.transition_status = AsyncMock(return_value=True)
    repo.get_items = AsyncMock(return_value=make_items(
        ("art-1", "100000", LineItemType.PURCHASE),
        ("art-2", "50000", LineItemType.RENTAL),
    ))
    return repo


@pytest.fixture
def mock_subscription_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda subscription: subscription)
    return repo


@pytest.fixture
def mock_deposit_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda deposit: deposit)
    return repo


@pytest.fixture
def mock_identity():
    identity = MagicMock()
    identity.resolve_actor = AsyncMock(return_value=ADMIN)
    identity.is_admin = MagicMock(side_effect=lambda actor: actor.role == "admin")
    return identity


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_deposit_confirmed = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def use_case(mock_uow, mock_order_repo, mock_subscription_repo, mock_deposit_repo, mock_identity, mock_notifier):
    return ConfirmDeposit(
        uow=mock_uow,
        order_repo=mock_order_repo,
        subscription_repo=mock_subscription_repo,
        deposit_repo=mock_deposit_repo,
        identity_gateway=mock_identity,
        notification_service=mock_notifier,
    )


@pytest.mark.asyncio
class TestConfirmDepositSuccess:

    async def test_marks_paid_and_creates_rental_subscription(
        self, use_case, mock_order_repo, mock_subscription_repo, mock_deposit_repo, mock_uow
    ):
        """
        Given: pending_deposit order with a purchase (100000) and a rental (50000)
        When: Admin confirms the deposit
        Then: Order is paid, one active subscription for the rental line
        """
        result = await use_case.execute("u-admin", "o-1")

        assert result.is_ok()
        assert result.value.order.status == "paid"
        assert len(result.value.subscriptions) == 1

        subscription = result.value.subscriptions[0]
        assert subscription.artwork_id == "art-2"
        assert subscription.user_id == "u-buyer"
        assert subscription.order_id == "o-1"
        assert subscription.line_item_index == 1
        assert subscription.status == "active"
        assert subscription.billing_cycle == "monthly"
        assert subscription.monthly_fee == Decimal("50000")
        assert subscription.next_payment_due == subscription.end_date

        assert len(subscription.deposit_history) == 1
        deposit = subscription.deposit_history[0]
        assert deposit.sequence == 1
        assert deposit.amount == Decimal("50000")
        assert deposit.confirmed_by == "admin@artsfactory.kr"
        assert deposit.note == INITIAL_DEPOSIT_NOTE

        mock_order_repo.get_by_id.assert_awaited_once_with("o-1", for_update=True)
        mock_order_repo.transition_status.assert_awaited_once_with(
            "o-1", OrderStatus.PENDING_DEPOSIT, OrderStatus.PAID
        )
        mock_subscription_repo.create.assert_awaited_once()
        mock_deposit_repo.create.assert_awaited_once()
        mock_uow.commit.assert_awaited_once()

    async def test_no_rental_lines_creates_no_subscriptions(
        self, use_case, mock_order_repo, mock_subscription_repo
    ):
        mock_order_repo.get_items = AsyncMock(return_value=make_items(
            ("art-1", "100000", LineItemType.PURCHASE),
        ))

        result = await use_case.execute("u-admin", "o-1")

        assert result.is_ok()
        assert result.value.order.status == "paid"
        assert result.value.subscriptions == []
        mock_subscription_repo.create.assert_not_awaited()

    async def test_uses_configured_billing_cycle(
        self, mock_uow, mock_order_repo, mock_subscription_repo, mock_deposit_repo, mock_identity
    ):
        use_case = ConfirmDeposit(
            uow=mock_uow,
            order_repo=mock_order_repo,
            subscription_repo=mock_subscription_repo,
            deposit_repo=mock_deposit_repo,
            identity_gateway=mock_identity,
            billing_cycle=BillingCycle.YEARLY,
        )

        result = await use_case.execute("u-admin", "o-1")

        subscription = result.value.subscriptions[0]
        assert subscription.billing_cycle == "yearly"
        assert subscription.end_date.year == subscription.start_date.year + 1

    async def test_notifies_after_commit(self, use_case, mock_notifier):
        result = await use_case.execute("u-admin", "o-1")

        assert result.is_ok()
        mock_notifier.send_deposit_confirmed.assert_awaited_once()
        order, subscriptions = mock_notifier.send_deposit_confirmed.call_args.args
        assert order.status == OrderStatus.PAID
        assert len(subscriptions) == 1

    async def test_notification_failure_does_not_change_result(self, use_case, mock_notifier):
        mock_notifier.send_deposit_confirmed = AsyncMock(return_value=False)

        result = await use_case.execute("u-admin", "o-1")

        assert result.is_ok()

    async def test_raising_notifier_does_not_fail_confirmed_order(self, use_case, mock_notifier, mock_uow):
        mock_notifier.send_deposit_confirmed = AsyncMock(side_effect=RuntimeError("webhook exploded"))

        result = await use_case.execute("u-admin", "o-1")

        assert result.is_ok()
        assert result.value.order.status == "paid"
        mock_uow.commit.assert_awaited_once()
        mock_uow.rollback.assert_not_awaited()


@pytest.mark.asyncio
class TestConfirmDepositRejected:

    async def test_non_admin_forbidden(self, use_case, mock_identity, mock_order_repo):
        mock_identity.resolve_actor = AsyncMock(return_value=BUYER)

        result = await use_case.execute("u-buyer", "o-1")

        assert result.is_err()
        assert result.error.code == ErrorCode.FORBIDDEN
        mock_order_repo.get_by_id.assert_not_awaited()

    async def test_unauthenticated(self, use_case, mock_identity):
        mock_identity.resolve_actor = AsyncMock(return_value=None)

        result = await use_case.execute(None, "o-1")

        assert result.error.code == ErrorCode.UNAUTHENTICATED

    async def test_order_not_found(self, use_case, mock_order_repo, mock_uow):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("u-admin", "o-missing")

        assert result.error.code == ErrorCode.NOT_FOUND
        mock_uow.rollback.assert_awaited_once()

    @pytest.mark.parametrize("status", [
        OrderStatus.PAID,
        OrderStatus.SHIPPING,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    ])
    async def test_not_pending_deposit(self, use_case, mock_order_repo, mock_subscription_repo, mock_uow, status):
        """A second confirmation sees status paid and creates nothing"""
        mock_order_repo.get_by_id = AsyncMock(return_value=make_order(status))

        result = await use_case.execute("u-admin", "o-1")

        assert result.error.code == ErrorCode.INVALID_STATE
        mock_order_repo.transition_status.assert_not_awaited()
        mock_subscription_repo.create.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    async def test_lost_compare_and_set(self, use_case, mock_order_repo, mock_subscription_repo, mock_uow):
        mock_order_repo.transition_status = AsyncMock(return_value=False)

        result = await use_case.execute("u-admin", "o-1")

        assert result.error.code == ErrorCode.INVALID_STATE
        mock_subscription_repo.create.assert_not_awaited()
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_awaited()

    async def test_duplicate_subscription_constraint(self, use_case, mock_subscription_repo, mock_uow, mock_notifier):
        mock_subscription_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT INTO subscriptions", {}, Exception("UNIQUE constraint failed"))
        )

        result = await use_case.execute("u-admin", "o-1")

        assert result.error.code == ErrorCode.INVALID_STATE
        mock_uow.rollback.assert_awaited_once()
        mock_notifier.send_deposit_confirmed.assert_not_awaited()

    async def test_persistence_failure(self, use_case, mock_uow):
        mock_uow.commit = AsyncMock(side_effect=RuntimeError("connection lost"))

        result = await use_case.execute("u-admin", "o-1")

        assert result.error.code == ErrorCode.PERSISTENCE_FAILURE
        mock_uow.rollback.assert_awaited_once()
