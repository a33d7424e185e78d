"""
Relational inventory store backed by SQLAlchemy async sessions.

One store wraps one session; the session's owner (session_scope)
commits or rolls back. Uniqueness of (user_id, sku) is enforced by a
unique index as well as by a lookup before insert. Owning user rows are
provisioned on first write.

Usage:
    async with session_scope() as session:
        store = SqlInventoryStore(session)
        item = await store.create_item(item)
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mrlister.core.exceptions import DuplicateSkuError
from mrlister.core.interfaces import IInventoryStore
from mrlister.core.models import InventoryItem, Marketplace
from mrlister.db.mappers import (
    item_columns,
    item_from_orm,
    marketplace_from_orm,
    orm_from_marketplace,
)
from mrlister.db.repositories import (
    InventoryItemRepository,
    MarketplaceRepository,
    UserRepository,
)
from mrlister.storage.identity_guard import ensure_identity_unchanged

logger = logging.getLogger(__name__)


class SqlInventoryStore(IInventoryStore):
    """IInventoryStore over the inventory and marketplace repositories."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._items = InventoryItemRepository(session)
        self._marketplaces = MarketplaceRepository(session)
        self._users = UserRepository(session)

    async def get_item(self, item_id: int) -> InventoryItem | None:
        row = await self._items.get_by_id(item_id)
        return item_from_orm(row) if row else None

    async def get_items(self, item_ids: list[int]) -> list[InventoryItem]:
        """Batch fetch in request order; ids that do not resolve are skipped."""
        rows = {row.id: row for row in await self._items.find_by_ids(item_ids)}
        return [item_from_orm(rows[i]) for i in item_ids if i in rows]

    async def list_items_by_user(self, user_id: int) -> list[InventoryItem]:
        rows = await self._items.find_by_user(user_id)
        return [item_from_orm(row) for row in rows]

    async def get_item_by_sku(self, user_id: int, sku: str) -> InventoryItem | None:
        row = await self._items.find_by_sku(user_id, sku)
        return item_from_orm(row) if row else None

    async def get_item_by_barcode(self, user_id: int, barcode: str) -> InventoryItem | None:
        if not barcode:
            return None
        row = await self._items.find_by_barcode(user_id, barcode)
        return item_from_orm(row) if row else None

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        await self._users.get_or_create(item.user_id)
        if await self._items.find_by_sku(item.user_id, item.sku) is not None:
            raise DuplicateSkuError(item.sku)
        try:
            row = await self._items.create(**item_columns(item))
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same SKU.
            await self._session.rollback()
            raise DuplicateSkuError(item.sku) from e
        logger.debug(f"Inserted item {row.id} (sku={row.sku}) for user {row.user_id}")
        return item_from_orm(row)

    async def update_item(self, item_id: int, **changes: Any) -> InventoryItem | None:
        changes = ensure_identity_unchanged(changes)
        row = await self._items.update(item_id, **changes)
        return item_from_orm(row) if row else None

    async def get_marketplace(self, marketplace_id: int) -> Marketplace | None:
        row = await self._marketplaces.get_by_id(marketplace_id)
        return marketplace_from_orm(row) if row else None

    async def list_marketplaces_by_user(self, user_id: int) -> list[Marketplace]:
        rows = await self._marketplaces.find_by_user(user_id)
        return [marketplace_from_orm(row) for row in rows]

    async def create_marketplace(self, marketplace: Marketplace) -> Marketplace:
        await self._users.get_or_create(marketplace.user_id)
        row = orm_from_marketplace(marketplace)
        self._session.add(row)
        await self._session.flush()
        return marketplace_from_orm(row)
