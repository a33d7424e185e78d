"""
Database repository layer for MrLister.

All repositories inherit from BaseRepository and provide tenant-isolated
CRUD operations plus entity-specific query methods.

Usage:
    from mrlister.db.repositories import InventoryItemRepository

    repo = InventoryItemRepository(session)
    items = await repo.find_by_user(user_id)
"""

from mrlister.db.repositories.base_repo import BaseRepository
from mrlister.db.repositories.inventory_repo import InventoryItemRepository
from mrlister.db.repositories.marketplace_repo import MarketplaceRepository
from mrlister.db.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "InventoryItemRepository",
    "MarketplaceRepository",
    "UserRepository",
]
