"""Helpers for admin listings that join ledger rows with collaborator data.

Users or catalog items removed after the fact are rendered with a placeholder
instead of failing the listing.
"""

from typing import Dict, Optional, Tuple
from src.app.services.catalog_gateway import CatalogItemDTO
from src.app.services.identity_gateway import ActorDTO

DELETED_USER_PLACEHOLDER = "(deleted user)"
DELETED_ITEM_PLACEHOLDER = "(deleted item)"


def buyer_display(users: Dict[str, ActorDTO], user_id: str) -> Tuple[str, Optional[str]]:
    user = users.get(user_id)
    if user is None:
        return DELETED_USER_PLACEHOLDER, None
    return user.name, user.email


def item_title(items: Dict[str, CatalogItemDTO], item_id: str) -> str:
    item = items.get(item_id)
    if item is None:
        return DELETED_ITEM_PLACEHOLDER
    return item.title
