"""Catalog Gateway Interface

Read-only view of sellable catalog items, owned by the catalog module.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel


class CatalogItemDTO(BaseModel):
    id: str
    title: str
    price: Decimal
    rental_price: Decimal
    is_sellable: bool


class CatalogGateway(ABC):

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[CatalogItemDTO]:
        """
        Look up one catalog item

        Args:
            item_id: Catalog item ID

        Returns:
            CatalogItemDTO if the item exists, None otherwise
        """
        pass

    @abstractmethod
    async def get_items(self, item_ids: List[str]) -> Dict[str, CatalogItemDTO]:
        """
        Look up many catalog items at once

        Missing IDs are simply absent from the returned mapping.
        """
        pass
