"""Unit tests for Order domain entity and its status machine"""

import pytest
from decimal import Decimal
from src.domain.order import Order, OrderStatus, PaymentMethod, can_transition
from src.domain.order_item import OrderItem, LineItemType


def make_order(**overrides) -> Order:
    fields = dict(
        user_id="u-buyer",
        total_amount=Decimal("150000"),
        depositor_name="Kim Minji",
        shipping_recipient="Kim Minji",
        shipping_phone="010-1234-5678",
        shipping_address="7 Munhwajeondang-ro",
        shipping_zip_code="61485",
        bank_name="Shinhan Bank",
        bank_account_number="110-123-456789",
        bank_account_holder="Arts Factory Co., Ltd.",
    )
    fields.update(overrides)
    return Order(**fields)


class TestOrderCreation:

    def test_defaults(self):
        order = make_order()

        assert order.id
        assert order.status == OrderStatus.PENDING_DEPOSIT
        assert order.payment_method == PaymentMethod.BANK_TRANSFER
        assert order.shipping_detail_address is None
        assert order.created_at is not None

    def test_ids_are_unique(self):
        assert make_order().id != make_order().id


class TestOrderTransitions:

    @pytest.mark.parametrize("from_status,to_status", [
        (OrderStatus.PENDING_DEPOSIT, OrderStatus.PAID),
        (OrderStatus.PAID, OrderStatus.SHIPPING),
        (OrderStatus.SHIPPING, OrderStatus.COMPLETED),
        (OrderStatus.PENDING_DEPOSIT, OrderStatus.CANCELLED),
        (OrderStatus.PAID, OrderStatus.CANCELLED),
        (OrderStatus.SHIPPING, OrderStatus.CANCELLED),
    ])
    def test_allowed(self, from_status, to_status):
        assert can_transition(from_status, to_status)

    @pytest.mark.parametrize("from_status,to_status", [
        (OrderStatus.PAID, OrderStatus.PENDING_DEPOSIT),
        (OrderStatus.PENDING_DEPOSIT, OrderStatus.SHIPPING),
        (OrderStatus.COMPLETED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING_DEPOSIT),
        (OrderStatus.COMPLETED, OrderStatus.PAID),
    ])
    def test_rejected(self, from_status, to_status):
        assert not can_transition(from_status, to_status)

    def test_terminal_statuses(self):
        assert make_order(status=OrderStatus.COMPLETED).is_terminal()
        assert make_order(status=OrderStatus.CANCELLED).is_terminal()
        assert not make_order(status=OrderStatus.PAID).is_terminal()

    def test_can_transition_to_uses_current_status(self):
        order = make_order(status=OrderStatus.PAID)

        assert order.can_transition_to(OrderStatus.SHIPPING)
        assert not order.can_transition_to(OrderStatus.PAID)


class TestOrderItem:

    def test_rental_flag(self):
        rental = OrderItem(order_id="o-1", line_index=0, artwork_id="art-1",
                           price=Decimal("50000"), item_type=LineItemType.RENTAL)
        purchase = OrderItem(order_id="o-1", line_index=1, artwork_id="art-2",
                             price=Decimal("100000"), item_type=LineItemType.PURCHASE)

        assert rental.is_rental()
        assert not purchase.is_rental()
