"""
Abstract base classes defining the core contracts for MrLister.

Storage backends, export schemas and QR encoders implement these
interfaces so business logic never depends on a concrete backend.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date
from typing import Any

from mrlister.core.models import InventoryItem, Marketplace, MarketplacePlatform, QrPayload

RowValue = str | int | float | bool | None


class IInventoryStore(ABC):
    """Storage capability shared by the in-memory and relational backends."""

    @abstractmethod
    async def get_item(self, item_id: int) -> InventoryItem | None:
        """Return the item with this id, or None."""
        ...

    async def get_items(self, item_ids: list[int]) -> list[InventoryItem]:
        """Return the items whose ids resolve, in request order. Unknown ids are skipped."""
        items = []
        for item_id in item_ids:
            item = await self.get_item(item_id)
            if item is not None:
                items.append(item)
        return items

    @abstractmethod
    async def list_items_by_user(self, user_id: int) -> list[InventoryItem]:
        """Return every item owned by the user, oldest first."""
        ...

    @abstractmethod
    async def get_item_by_sku(self, user_id: int, sku: str) -> InventoryItem | None:
        """Return the user's item with this SKU, or None."""
        ...

    @abstractmethod
    async def get_item_by_barcode(self, user_id: int, barcode: str) -> InventoryItem | None:
        """Return the user's item whose stored barcode matches, or None."""
        ...

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """
        Persist a new item and return it with its id assigned.

        Raises:
            DuplicateSkuError: If the user already owns an item with this SKU.
        """
        ...

    @abstractmethod
    async def update_item(self, item_id: int, **changes: Any) -> InventoryItem | None:
        """
        Apply field changes to an item.

        Returns:
            The updated item, or None if the id does not resolve.

        Raises:
            IdentityImmutableError: If the changes touch the SKU or barcode.
        """
        ...

    @abstractmethod
    async def get_marketplace(self, marketplace_id: int) -> Marketplace | None:
        """Return the marketplace record, or None."""
        ...

    @abstractmethod
    async def list_marketplaces_by_user(self, user_id: int) -> list[Marketplace]:
        """Return the user's marketplace connections, oldest first."""
        ...

    @abstractmethod
    async def create_marketplace(self, marketplace: Marketplace) -> Marketplace:
        """Persist a marketplace record and return it with its id assigned."""
        ...


class IExportSchema(ABC):
    """One marketplace's bulk-upload file layout."""

    platform: MarketplacePlatform
    artifact: str
    headers: Sequence[str]

    @abstractmethod
    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        """Map an item to header → value. Missing headers export as empty."""
        ...

    @abstractmethod
    def filename(self, marketplace_name: str, export_date: date) -> str:
        """Build the download filename for this export."""
        ...


class IQrEncoder(ABC):
    """Renders a QR payload into a scannable image reference."""

    @abstractmethod
    def encode(self, payload: QrPayload) -> str:
        """Return the encoded image (e.g. a data URL), or "" on failure."""
        ...
