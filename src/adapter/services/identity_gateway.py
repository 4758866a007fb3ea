"""SQLAlchemy Identity Gateway

Reads the identity module's users table and writes the saved shipping
address back to the buyer's profile.
"""

from datetime import datetime
from typing import Dict, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.identity_gateway import IdentityGateway, ActorDTO, ShippingAddressDTO
from src.domain.user import User, UserRole


class SqlAlchemyIdentityGateway(IdentityGateway):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_actor(self, actor_id: Optional[str]) -> Optional[ActorDTO]:
        if not actor_id:
            return None
        user = await self._get_user(actor_id)
        return self._to_dto(user) if user else None

    def is_admin(self, actor: ActorDTO) -> bool:
        return actor.role == UserRole.ADMIN.value

    async def get_users(self, user_ids: List[str]) -> Dict[str, ActorDTO]:
        if not user_ids:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(user_ids)))
        return {user.id: self._to_dto(user) for user in result.scalars().all()}

    async def save_shipping_address(self, user_id: str, address: ShippingAddressDTO) -> None:
        user = await self._get_user(user_id)
        if not user:
            return
        user.phone = address.phone
        user.address = address.address
        user.detail_address = address.detail_address
        user.zip_code = address.zip_code
        user.updated_at = datetime.utcnow()
        self.session.add(user)
        await self.session.flush()

    async def _get_user(self, user_id: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    def _to_dto(self, user: User) -> ActorDTO:
        return ActorDTO(id=user.id, email=user.email, name=user.name, role=user.role.value)
