"""
Marketplace CSV export service.

Turns a marketplace record and a set of inventory items into a bulk-upload
file: resolve marketplace → collect items → filter eligible → map rows →
render CSV → name the file.

Nothing is written back to storage; an export is derived on demand.

Usage:
    service = ExportService(store, SchemaRegistry.default())
    artifact = await service.generate_export(marketplace_id=3, item_ids=[1, 2])
"""

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime

from mrlister.core.exceptions import MarketplaceNotFoundError
from mrlister.core.interfaces import IExportSchema, IInventoryStore
from mrlister.core.models import ExportArtifact, InventoryItem
from mrlister.exporters.csv_writer import render_csv
from mrlister.exporters.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(UTC).date()


def filter_exportable(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    """Keep items whose status makes them eligible for export, order preserved."""
    return [item for item in items if item.is_exportable]


def build_export(
    schema: IExportSchema,
    items: Iterable[InventoryItem],
    marketplace_name: str,
    export_date: date,
) -> ExportArtifact:
    """
    Render already-filtered items into an ExportArtifact.

    Pure: no storage access, so it can be reused for previews and tests.
    """
    rows = [schema.map_row(item) for item in items]
    return ExportArtifact(
        file_name=schema.filename(marketplace_name, export_date),
        csv_content=render_csv(schema.headers, rows),
        marketplace_name=marketplace_name,
        platform=schema.platform,
        row_count=len(rows),
    )


class ExportService:
    """
    Generates marketplace bulk-upload CSV files from stored inventory.

    Unknown item ids, items owned by someone else and items in an
    ineligible status are dropped silently; only a missing marketplace
    is an error.
    """

    def __init__(
        self,
        store: IInventoryStore,
        registry: SchemaRegistry | None = None,
        today: Callable[[], date] = utc_today,
    ):
        self._store = store
        self._registry = registry or SchemaRegistry.default()
        self._today = today

    async def generate_export(
        self,
        marketplace_id: int,
        item_ids: list[int] | None = None,
        user_id: int | None = None,
    ) -> ExportArtifact:
        """
        Produce the export file for a marketplace.

        Args:
            marketplace_id: Marketplace record to export for.
            item_ids: Specific items to include. None exports every item
                owned by the marketplace's user.
            user_id: Caller identity. When given, a marketplace owned by a
                different user is reported as not found.

        Returns:
            ExportArtifact with the CSV text and download filename.

        Raises:
            MarketplaceNotFoundError: If the marketplace does not resolve.
            UnsupportedMarketplaceError: If the registry is strict and the
                marketplace name has no schema.
        """
        marketplace = await self._store.get_marketplace(marketplace_id)
        if marketplace is None:
            raise MarketplaceNotFoundError(marketplace_id)
        if user_id is not None and marketplace.user_id != user_id:
            logger.warning(
                f"User {user_id} requested export for marketplace {marketplace_id} "
                f"owned by another user"
            )
            raise MarketplaceNotFoundError(marketplace_id)

        schema = self._registry.resolve(marketplace.name)

        if item_ids is not None:
            fetched = await self._store.get_items(item_ids)
            candidates = [item for item in fetched if item.user_id == marketplace.user_id]
        else:
            candidates = await self._store.list_items_by_user(marketplace.user_id)

        eligible = filter_exportable(candidates)
        artifact = build_export(schema, eligible, marketplace.name, self._today())

        logger.info(
            f"Exported {artifact.row_count}/{len(candidates)} items for "
            f"marketplace {marketplace_id} ({marketplace.name}) as {schema.platform.value}: "
            f"{artifact.file_name}"
        )
        return artifact
