from .unit_of_work import UnitOfWork
from .notification_service import NotificationService
from .catalog_gateway import CatalogGateway, CatalogItemDTO
from .identity_gateway import IdentityGateway, ActorDTO, ShippingAddressDTO

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "CatalogGateway",
    "CatalogItemDTO",
    "IdentityGateway",
    "ActorDTO",
    "ShippingAddressDTO",
]
