"""
Pydantic domain models for MrLister.

These models represent the data flowing through the listing pipeline:
AnalysisResult → InventoryItem (with ItemIdentity) → ExportArtifact
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(UTC)


class ItemStatus(StrEnum):
    """Lifecycle status of an inventory item."""
    DRAFT = "draft"
    ACTIVE = "active"
    LISTED = "listed"
    READY_TO_LIST = "ready_to_list"
    SOLD = "sold"
    ARCHIVED = "archived"


# "listed" is the persisted spelling of an active listing.
EXPORTABLE_STATUSES: frozenset[str] = frozenset(
    {ItemStatus.ACTIVE, ItemStatus.LISTED, ItemStatus.READY_TO_LIST}
)


class MarketplacePlatform(StrEnum):
    """Marketplaces with a registered bulk-upload schema."""
    SHOPIFY = "shopify"
    EBAY = "ebay"
    ETSY = "etsy"
    AMAZON = "amazon"
    TIKTOK = "tiktok"
    HIPSTAMP = "hipstamp"


DEFAULT_BARCODE_TYPE = "EAN-13"


# ─── Identity ─────────────────────────────────────────────────


class QrPayload(BaseModel):
    """Content encoded into an item's QR code."""

    model_config = ConfigDict(frozen=True)

    sku: str
    title: str
    id: int = 0

    def to_json(self) -> str:
        """Compact JSON text, the exact string placed in the QR symbol."""
        return self.model_dump_json()


class ItemIdentity(BaseModel):
    """Identifiers generated once at intake and never regenerated."""

    model_config = ConfigDict(frozen=True)

    sku: str = Field(..., min_length=1, max_length=64)
    barcode: str = Field(default="")
    barcode_type: str = Field(default=DEFAULT_BARCODE_TYPE)
    qr_payload: QrPayload | None = None
    qr_code: str = Field(default="", description="Encoded QR image (data URL)")

    def as_metadata(self) -> dict[str, Any]:
        """Legacy metadata bag shape read by label and scanner clients."""
        return {
            "barcode": self.barcode,
            "barcodeType": self.barcode_type,
            "qrCode": self.qr_code,
        }


# ─── AI Intake Contract ───────────────────────────────────────


class PriceRange(BaseModel):
    min: float = Field(default=0.0, ge=0)
    max: float = Field(default=0.0, ge=0)


class AnalysisResult(BaseModel):
    """Structured output of the vision-AI collaborator.

    Accepts both snake_case and the collaborator's camelCase keys.
    Optional enrichment fields tolerate null and fall back to empty values.
    Unrecognised keys (country, year, ...) are kept and carried into ai_data.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str = Field(..., min_length=1)
    description: str = ""
    category: str = ""
    condition: str = ""
    suggested_price: float = Field(default=0.0, ge=0)
    price_range: PriceRange | None = None
    brand: str | None = None
    features: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    detected_barcode: str | None = None
    barcode_type: str | None = None
    dimensions: Any = None
    weight: Any = None
    materials: list[str] = Field(default_factory=list)

    @field_validator("features", "keywords", "materials", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return value or []

    @field_validator("description", "category", "condition", mode="before")
    @classmethod
    def _none_to_str(cls, value: Any) -> Any:
        return value or ""

    @field_validator("detected_barcode", "brand", "barcode_type", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class IntakeOverrides(BaseModel):
    """User-supplied values that take precedence over AI suggestions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sku: str | None = None
    title: str | None = None
    description: str | None = None
    category: str | None = None
    subcategory: str | None = None
    condition: str | None = None
    brand: str | None = None
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)
    status: str | None = None
    tags: list[str] | None = None
    primary_image_url: str | None = None
    additional_image_urls: list[str] | None = None


# ─── Inventory ────────────────────────────────────────────────


class InventoryItem(BaseModel):
    """Canonical inventory record."""

    id: int | None = None
    user_id: int
    identity: ItemIdentity
    title: str = Field(..., min_length=1)
    description: str = ""
    category: str = ""
    subcategory: str | None = None
    condition: str = ""
    brand: str | None = None
    materials: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    dimensions: Any = None
    weight: Any = None
    price: float = Field(default=0.0, ge=0)
    original_price: float | None = None
    cost: float | None = None
    quantity: int = Field(default=1, ge=0)
    status: str = ItemStatus.DRAFT
    primary_image_url: str | None = None
    thumbnail_url: str | None = None
    additional_image_urls: list[str] = Field(default_factory=list)
    ai_generated: bool = False
    ai_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def sku(self) -> str:
        return self.identity.sku

    @property
    def barcode(self) -> str:
        return self.identity.barcode

    @property
    def metadata(self) -> dict[str, Any]:
        return self.identity.as_metadata()

    @property
    def image_urls(self) -> list[str]:
        """Primary image first, then the additional images."""
        urls = [self.primary_image_url] if self.primary_image_url else []
        return urls + [u for u in self.additional_image_urls if u]

    @property
    def is_exportable(self) -> bool:
        return self.status in EXPORTABLE_STATUSES


class Marketplace(BaseModel):
    """A user's marketplace connection; exports are requested against one."""

    id: int | None = None
    user_id: int
    name: str = Field(..., min_length=1, max_length=100)
    is_connected: bool = False
    settings: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)


class ExportArtifact(BaseModel):
    """A generated bulk-upload file. Derived on demand, never persisted."""

    file_name: str
    csv_content: str
    marketplace_name: str
    platform: MarketplacePlatform
    row_count: int = Field(default=0, ge=0)

    @property
    def media_type(self) -> str:
        return "text/csv"

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.file_name}"'
