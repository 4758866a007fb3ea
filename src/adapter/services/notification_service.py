"""Notification Service Implementations

Provides concrete implementations for announcing confirmed deposits.
"""

import logging
from typing import List, Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.order import Order
from src.domain.subscription import Subscription

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs events

    Default when no webhook is configured.
    """

    async def send_deposit_confirmed(self, order: Order, subscriptions: List[Subscription]) -> bool:
        logger.info(
            f"[DEPOSIT CONFIRMED] Order: {order.id}, "
            f"User: {order.user_id}, "
            f"Total: {order.total_amount}, "
            f"Subscriptions: {[s.id for s in subscriptions]}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that sends events via HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST events to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    def build_payload(self, order: Order, subscriptions: List[Subscription]) -> dict:
        return {
            "type": "deposit_confirmed",
            "order_id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount),
            "depositor_name": order.depositor_name,
            "subscriptions": [
                {
                    "subscription_id": s.id,
                    "artwork_id": s.artwork_id,
                    "monthly_fee": str(s.monthly_fee),
                    "next_payment_due": s.next_payment_due.isoformat(),
                }
                for s in subscriptions
            ],
        }

    async def send_deposit_confirmed(self, order: Order, subscriptions: List[Subscription]) -> bool:
        """
        Send deposit event via webhook

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = self.build_payload(order, subscriptions)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Webhook notification sent for order {order.id} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send webhook notification for order {order.id}: {e}"
            )
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error sending webhook notification for order {order.id}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Used to log every event and also POST it when a webhook is configured.
    """

    def __init__(self, services: List[NotificationService]):
        self.services = services

    async def send_deposit_confirmed(self, order: Order, subscriptions: List[Subscription]) -> bool:
        """
        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_deposit_confirmed(order, subscriptions):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.
    """
    services: List[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
