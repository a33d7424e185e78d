"""
Inventory-item database repository.
"""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mrlister.db.models import InventoryItem
from mrlister.db.repositories.base_repo import BaseRepository


class InventoryItemRepository(BaseRepository[InventoryItem]):
    """Identity lookups over a user's inventory."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, InventoryItem)

    async def find_by_user(self, user_id: int) -> list[InventoryItem]:
        """Get a user's items in creation order."""
        return await self.scalars(self.owned_by(user_id))

    async def find_by_ids(self, item_ids: Iterable[int]) -> list[InventoryItem]:
        """Get the items whose ids are listed. Unknown ids are skipped."""
        ids = list(item_ids)
        if not ids:
            return []
        return await self.scalars(select(InventoryItem).where(InventoryItem.id.in_(ids)))

    async def find_by_sku(self, user_id: int, sku: str) -> InventoryItem | None:
        """Find a user's item by SKU (unique per user)."""
        rows = await self.scalars(self.owned_by(user_id).where(InventoryItem.sku == sku))
        return rows[0] if rows else None

    async def find_by_barcode(self, user_id: int, barcode: str) -> InventoryItem | None:
        """Find a user's item by stored barcode. Oldest match wins."""
        stmt = self.owned_by(user_id).where(InventoryItem.barcode == barcode).limit(1)
        rows = await self.scalars(stmt)
        return rows[0] if rows else None
