"""Identity Gateway Interface

Resolves the acting user and its role. Authentication happens upstream;
this gateway only turns an already-authenticated actor ID into an Actor.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from pydantic import BaseModel


class ActorDTO(BaseModel):
    id: str
    email: str
    name: str
    role: str


class ShippingAddressDTO(BaseModel):
    recipient: str
    phone: str
    address: str
    detail_address: Optional[str] = None
    zip_code: str


class IdentityGateway(ABC):

    @abstractmethod
    async def resolve_actor(self, actor_id: Optional[str]) -> Optional[ActorDTO]:
        """
        Resolve the acting user

        Args:
            actor_id: Authenticated user ID (None when the request carried none)

        Returns:
            ActorDTO if the user exists, None otherwise
        """
        pass

    @abstractmethod
    def is_admin(self, actor: ActorDTO) -> bool:
        pass

    @abstractmethod
    async def get_users(self, user_ids: List[str]) -> Dict[str, ActorDTO]:
        """Users keyed by ID; missing IDs are absent"""
        pass

    @abstractmethod
    async def save_shipping_address(self, user_id: str, address: ShippingAddressDTO) -> None:
        """Store the address on the user's profile for future checkouts"""
        pass
