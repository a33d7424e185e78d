"""
In-memory inventory store.

Process-local and non-persistent. Records are copied on the way in and on
the way out so callers can never mutate stored state in place.

Usage:
    store = InMemoryInventoryStore()
    item = await store.create_item(item)
"""

import asyncio
import itertools
import logging
from typing import Any

from mrlister.core.exceptions import DuplicateSkuError
from mrlister.core.interfaces import IInventoryStore
from mrlister.core.models import InventoryItem, Marketplace, utc_now
from mrlister.storage.identity_guard import ensure_identity_unchanged

logger = logging.getLogger(__name__)


class InMemoryInventoryStore(IInventoryStore):
    """Dict-backed store with auto-increment ids, guarded by an asyncio.Lock."""

    def __init__(self):
        self._items: dict[int, InventoryItem] = {}
        self._marketplaces: dict[int, Marketplace] = {}
        self._item_ids = itertools.count(1)
        self._marketplace_ids = itertools.count(1)
        self._lock = asyncio.Lock()

    # ─── Items ────────────────────────────────────────────────

    async def get_item(self, item_id: int) -> InventoryItem | None:
        item = self._items.get(item_id)
        return item.model_copy(deep=True) if item else None

    async def list_items_by_user(self, user_id: int) -> list[InventoryItem]:
        return [item.model_copy(deep=True) for item in self._owned_by(user_id)]

    async def get_item_by_sku(self, user_id: int, sku: str) -> InventoryItem | None:
        for item in self._owned_by(user_id):
            if item.sku == sku:
                return item.model_copy(deep=True)
        return None

    async def get_item_by_barcode(self, user_id: int, barcode: str) -> InventoryItem | None:
        for item in self._owned_by(user_id):
            if item.barcode and item.barcode == barcode:
                return item.model_copy(deep=True)
        return None

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        async with self._lock:
            if any(existing.sku == item.sku for existing in self._owned_by(item.user_id)):
                raise DuplicateSkuError(item.sku)
            item_id = next(self._item_ids)
            stored = item.model_copy(update={"id": item_id}, deep=True)
            self._items[item_id] = stored
        logger.debug(f"Stored item {item_id} (sku={stored.sku}) for user {stored.user_id}")
        return stored.model_copy(deep=True)

    async def update_item(self, item_id: int, **changes: Any) -> InventoryItem | None:
        changes = ensure_identity_unchanged(changes)
        async with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None
            data = current.model_dump()
            data.update(changes)
            data["updated_at"] = utc_now()
            updated = InventoryItem.model_validate(data)
            self._items[item_id] = updated
        return updated.model_copy(deep=True)

    def _owned_by(self, user_id: int) -> list[InventoryItem]:
        return [self._items[k] for k in sorted(self._items) if self._items[k].user_id == user_id]

    # ─── Marketplaces ─────────────────────────────────────────

    async def get_marketplace(self, marketplace_id: int) -> Marketplace | None:
        marketplace = self._marketplaces.get(marketplace_id)
        return marketplace.model_copy(deep=True) if marketplace else None

    async def list_marketplaces_by_user(self, user_id: int) -> list[Marketplace]:
        return [
            self._marketplaces[k].model_copy(deep=True)
            for k in sorted(self._marketplaces)
            if self._marketplaces[k].user_id == user_id
        ]

    async def create_marketplace(self, marketplace: Marketplace) -> Marketplace:
        async with self._lock:
            marketplace_id = next(self._marketplace_ids)
            stored = marketplace.model_copy(update={"id": marketplace_id}, deep=True)
            self._marketplaces[marketplace_id] = stored
        return stored.model_copy(deep=True)
