"""Unit tests for deposit notification services"""

import json
import httpx
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from src.domain.order import Order, OrderStatus
from src.domain.subscription import BillingCycle, Subscription


def make_order() -> Order:
    return Order(
        id="o-1",
        user_id="u-buyer",
        total_amount=Decimal("150000"),
        depositor_name="Kim Minji",
        status=OrderStatus.PAID,
        shipping_recipient="Kim Minji",
        shipping_phone="010-1234-5678",
        shipping_address="7 Munhwajeondang-ro",
        shipping_zip_code="61485",
        bank_name="Shinhan Bank",
        bank_account_number="110-123-456789",
        bank_account_holder="Arts Factory Co., Ltd.",
    )


def make_subscription() -> Subscription:
    return Subscription.start(
        user_id="u-buyer",
        artwork_id="art-2",
        order_id="o-1",
        line_item_index=1,
        monthly_fee=Decimal("50000"),
        billing_cycle=BillingCycle.MONTHLY,
        now=datetime(2024, 1, 31, 9, 0),
    )


class TestFactory:

    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service("http://hooks.local/deposits")

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)


class TestWebhookPayload:

    def test_payload_fields(self):
        service = WebhookNotificationService("http://hooks.local/deposits")
        subscription = make_subscription()

        payload = service.build_payload(make_order(), [subscription])

        assert payload["type"] == "deposit_confirmed"
        assert payload["order_id"] == "o-1"
        assert payload["status"] == "paid"
        assert payload["total_amount"] == "150000"
        assert payload["subscriptions"] == [{
            "subscription_id": subscription.id,
            "artwork_id": "art-2",
            "monthly_fee": "50000",
            "next_payment_due": "2024-02-29T09:00:00",
        }]
        json.dumps(payload)


@pytest.mark.asyncio
class TestWebhookDelivery:

    async def test_http_error_returns_false(self):
        service = WebhookNotificationService("http://hooks.local/deposits")
        request = httpx.Request("POST", "http://hooks.local/deposits")

        with patch("httpx.AsyncClient.post", new=AsyncMock(side_effect=httpx.ConnectError("refused", request=request))):
            sent = await service.send_deposit_confirmed(make_order(), [])

        assert sent is False

    async def test_success_returns_true(self):
        service = WebhookNotificationService("http://hooks.local/deposits")
        request = httpx.Request("POST", "http://hooks.local/deposits")
        response = httpx.Response(200, request=request)

        with patch("httpx.AsyncClient.post", new=AsyncMock(return_value=response)) as post:
            sent = await service.send_deposit_confirmed(make_order(), [])

        assert sent is True
        assert post.await_args.kwargs["json"]["order_id"] == "o-1"

    async def test_composite_survives_failing_service(self):
        failing = MagicMock()
        failing.send_deposit_confirmed = AsyncMock(side_effect=RuntimeError("boom"))
        composite = CompositeNotificationService([failing, LoggingNotificationService()])

        assert await composite.send_deposit_confirmed(make_order(), []) is True

    async def test_unexpected_error_returns_false(self):
        service = WebhookNotificationService("http://hooks.local/deposits")

        with patch("httpx.AsyncClient.post", new=AsyncMock(side_effect=ValueError("bad payload"))):
            sent = await service.send_deposit_confirmed(make_order(), [])

        assert sent is False
