from .unit_of_work import SqlAlchemyUnitOfWork
from .catalog_gateway import SqlAlchemyCatalogGateway
from .identity_gateway import SqlAlchemyIdentityGateway
from .notification_service import (
    LoggingNotificationService,
    WebhookNotificationService,
    CompositeNotificationService,
    create_notification_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyCatalogGateway",
    "SqlAlchemyIdentityGateway",
    "LoggingNotificationService",
    "WebhookNotificationService",
    "CompositeNotificationService",
    "create_notification_service",
]
