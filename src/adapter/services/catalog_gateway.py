"""SQLAlchemy Catalog Gateway

Reads the catalog module's artworks table. An artwork is sellable only while
its status is approved.
"""

from typing import Dict, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.catalog_gateway import CatalogGateway, CatalogItemDTO
from src.domain.artwork import Artwork, ArtworkStatus


class SqlAlchemyCatalogGateway(CatalogGateway):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_item(self, item_id: str) -> Optional[CatalogItemDTO]:
        result = await self.session.execute(select(Artwork).where(Artwork.id == item_id))
        artwork = result.scalar_one_or_none()
        return self._to_dto(artwork) if artwork else None

    async def get_items(self, item_ids: List[str]) -> Dict[str, CatalogItemDTO]:
        if not item_ids:
            return {}
        result = await self.session.execute(select(Artwork).where(Artwork.id.in_(item_ids)))
        return {artwork.id: self._to_dto(artwork) for artwork in result.scalars().all()}

    def _to_dto(self, artwork: Artwork) -> CatalogItemDTO:
        return CatalogItemDTO(
            id=artwork.id,
            title=artwork.title,
            price=artwork.price,
            rental_price=artwork.rental_price,
            is_sellable=artwork.status == ArtworkStatus.APPROVED,
        )
