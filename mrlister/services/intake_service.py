"""
Item intake service.

Turns a vision-AI analysis (plus optional user overrides) into a stored
InventoryItem with its identity assigned exactly once:

    SKU → barcode → QR payload → QR image → persist

Also answers scanner lookups by SKU or barcode.

Usage:
    service = IntakeService.from_settings(store, get_settings())
    item = await service.create_item(user_id=1, analysis=analysis)
"""

import logging
from typing import Any

from pydantic.alias_generators import to_snake

from mrlister.config import Settings
from mrlister.core.exceptions import DuplicateSkuError, ItemNotFoundError
from mrlister.core.interfaces import IInventoryStore, IQrEncoder
from mrlister.core.models import (
    DEFAULT_BARCODE_TYPE,
    AnalysisResult,
    IntakeOverrides,
    InventoryItem,
    ItemIdentity,
    ItemStatus,
)
from mrlister.identifiers.barcode import generate_barcode, is_valid_gtin
from mrlister.identifiers.qr import QrCodeEncoder, build_qr_payload
from mrlister.identifiers.sku import SuffixSource, generate_sku, get_suffix_source

logger = logging.getLogger(__name__)

# ─── Intake Defaults ──────────────────────────────────────────

UNKNOWN_BRAND = "Unknown"
DEFAULT_CONDITION = "good"
DEFAULT_QUANTITY = 1
AI_CONFIDENCE = 0.85
DEFAULT_SKU_ATTEMPTS = 5
CATEGORY_SEPARATOR = ">"


def split_category(category: str) -> tuple[str, str | None]:
    """
    Split a hierarchical category into (top level, remainder).

    "Music > Vinyl > Jazz" → ("Music", "Vinyl > Jazz")
    """
    segments = [s.strip() for s in category.split(CATEGORY_SEPARATOR)]
    top = segments[0]
    rest = [s for s in segments[1:] if s]
    return top, (" > ".join(rest) or None)


def dedupe(values: list[str]) -> list[str]:
    """Drop blanks and repeats, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


class IntakeService:
    """
    Creates inventory items from AI analysis results.

    Identity fields are generated here and nowhere else; the stores
    refuse to change them afterwards.
    """

    def __init__(
        self,
        store: IInventoryStore,
        qr_encoder: IQrEncoder | None = None,
        suffix_source: SuffixSource | None = None,
        max_sku_attempts: int = DEFAULT_SKU_ATTEMPTS,
    ):
        self._store = store
        self._qr_encoder = qr_encoder or QrCodeEncoder()
        self._suffix_source = suffix_source
        self._max_sku_attempts = max(1, max_sku_attempts)

    @classmethod
    def from_settings(cls, store: IInventoryStore, settings: Settings) -> "IntakeService":
        return cls(
            store,
            qr_encoder=QrCodeEncoder(image_size=settings.qr_image_size),
            suffix_source=get_suffix_source(settings.sku_suffix_strategy),
            max_sku_attempts=settings.sku_max_attempts,
        )

    # ─── Create ───────────────────────────────────────────────

    async def create_item(
        self,
        user_id: int,
        analysis: AnalysisResult,
        overrides: IntakeOverrides | None = None,
    ) -> InventoryItem:
        """
        Create and persist an item from an analysis result.

        Args:
            user_id: Owner of the new item.
            analysis: Vision-AI output. Missing optional fields default.
            overrides: User-entered values that win over the analysis.

        Returns:
            The stored item, with id and identity assigned.

        Raises:
            DuplicateSkuError: If an override SKU is already taken, or no
                free SKU was found within the configured attempts.
        """
        overrides = overrides or IntakeOverrides()

        title = overrides.title or analysis.title
        category, subcategory = split_category(overrides.category or analysis.category)
        if overrides.subcategory is not None:
            subcategory = overrides.subcategory or None
        condition = overrides.condition or analysis.condition or DEFAULT_CONDITION
        brand = overrides.brand or analysis.brand

        sku = await self._reserve_sku(
            user_id,
            override=overrides.sku,
            category=category,
            brand=brand,
            condition=condition,
            detected_barcode=analysis.detected_barcode,
        )
        identity = self._build_identity(sku, title, analysis)

        item = InventoryItem(
            user_id=user_id,
            identity=identity,
            title=title,
            description=(
                overrides.description if overrides.description is not None
                else analysis.description
            ),
            category=category,
            subcategory=subcategory,
            condition=condition,
            brand=brand or UNKNOWN_BRAND,
            materials=list(analysis.materials),
            tags=overrides.tags if overrides.tags is not None else dedupe(analysis.keywords),
            dimensions=analysis.dimensions,
            weight=analysis.weight,
            price=overrides.price if overrides.price is not None else analysis.suggested_price,
            original_price=overrides.original_price,
            cost=overrides.cost,
            quantity=overrides.quantity if overrides.quantity is not None else DEFAULT_QUANTITY,
            status=overrides.status or ItemStatus.DRAFT,
            primary_image_url=overrides.primary_image_url,
            additional_image_urls=overrides.additional_image_urls or [],
            ai_generated=True,
            ai_data=self._ai_data(analysis, brand),
        )

        stored = await self._store.create_item(item)
        logger.info(
            f"Created item {stored.id} for user {user_id}: sku={stored.sku} "
            f"barcode={stored.barcode} ({identity.barcode_type})"
        )
        return stored

    async def _reserve_sku(
        self,
        user_id: int,
        override: str | None,
        category: str,
        brand: str | None,
        condition: str,
        detected_barcode: str | None,
    ) -> str:
        """Pick a SKU the user does not already own."""
        if override:
            sku = override.strip()
            if await self._store.get_item_by_sku(user_id, sku) is not None:
                raise DuplicateSkuError(sku)
            return sku

        # A barcode-derived SKU is the same on every attempt
        attempts = 1 if (detected_barcode or "").strip() else self._max_sku_attempts
        sku = ""
        for attempt in range(1, attempts + 1):
            sku = generate_sku(
                category,
                brand=brand,
                condition=condition,
                detected_barcode=detected_barcode,
                suffix_source=self._suffix_source,
            )
            if await self._store.get_item_by_sku(user_id, sku) is None:
                return sku
            logger.warning(
                f"SKU {sku} already exists for user {user_id} "
                f"(attempt {attempt}/{attempts})"
            )
        raise DuplicateSkuError(sku, attempts=attempts)

    def _build_identity(self, sku: str, title: str, analysis: AnalysisResult) -> ItemIdentity:
        detected = (analysis.detected_barcode or "").strip()
        if detected:
            if not is_valid_gtin(detected):
                logger.warning(f"Detected barcode {detected} for SKU {sku} fails GTIN check")
            barcode = detected
        else:
            barcode = generate_barcode(sku)

        payload = build_qr_payload(sku, title)
        return ItemIdentity(
            sku=sku,
            barcode=barcode,
            barcode_type=analysis.barcode_type or DEFAULT_BARCODE_TYPE,
            qr_payload=payload,
            qr_code=self._qr_encoder.encode(payload),
        )

    @staticmethod
    def _ai_data(analysis: AnalysisResult, brand: str | None) -> dict[str, Any]:
        data: dict[str, Any] = {
            to_snake(key): value for key, value in (analysis.model_extra or {}).items()
        }
        data.update(
            brand=brand or UNKNOWN_BRAND,
            features=list(analysis.features),
            keywords=list(analysis.keywords),
            materials=list(analysis.materials),
            dimensions=analysis.dimensions,
            weight=analysis.weight,
            price_range=analysis.price_range.model_dump() if analysis.price_range else None,
            confidence=AI_CONFIDENCE,
        )
        return data

    # ─── Lookup ───────────────────────────────────────────────

    async def lookup_by_code(self, user_id: int, code: str) -> InventoryItem:
        """
        Find a user's item by scanned code: SKU first, then barcode.

        Raises:
            ItemNotFoundError: If neither matches.
        """
        code = code.strip()
        if code:
            item = await self._store.get_item_by_sku(user_id, code)
            if item is None:
                item = await self._store.get_item_by_barcode(user_id, code)
            if item is not None:
                return item
        raise ItemNotFoundError(f"No item with SKU or barcode '{code}'")
