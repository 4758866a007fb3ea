"""Subscription domain use cases"""
from .append_deposit import AppendDeposit
from .list_admin_subscriptions import ListAdminSubscriptions
from .list_due_subscriptions import ListDueSubscriptions
from .dtos import (
    DepositEntryDTO,
    SubscriptionDTO,
    AdminSubscriptionDTO,
    ListAdminSubscriptionsResponseDTO,
    AppendDepositCommandDTO,
    ListDueSubscriptionsResponseDTO,
)

__all__ = [
    "AppendDeposit",
    "ListAdminSubscriptions",
    "ListDueSubscriptions",
    "DepositEntryDTO",
    "SubscriptionDTO",
    "AdminSubscriptionDTO",
    "ListAdminSubscriptionsResponseDTO",
    "AppendDepositCommandDTO",
    "ListDueSubscriptionsResponseDTO",
]
