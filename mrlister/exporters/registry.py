"""
Registry of marketplace export schemas.

Consumers resolve a schema by marketplace name without knowing the
concrete class:

    registry = SchemaRegistry.default()
    schema = registry.resolve("eBay")

Unknown names fall back to the eBay layout unless the registry is strict,
in which case they raise UnsupportedMarketplaceError.
"""

import logging

from mrlister.core.exceptions import UnsupportedMarketplaceError
from mrlister.core.interfaces import IExportSchema
from mrlister.core.models import MarketplacePlatform
from mrlister.exporters.amazon_schema import AmazonSchema
from mrlister.exporters.ebay_schema import EbaySchema
from mrlister.exporters.etsy_schema import EtsySchema
from mrlister.exporters.hipstamp_schema import HipStampSchema
from mrlister.exporters.shopify_schema import DEFAULT_VENDOR, ShopifySchema
from mrlister.exporters.tiktok_schema import TikTokSchema

logger = logging.getLogger(__name__)

FALLBACK_PLATFORM = MarketplacePlatform.EBAY


class SchemaRegistry:
    """Case-insensitive lookup of export schemas by marketplace name."""

    def __init__(
        self,
        schemas: list[IExportSchema] | None = None,
        strict: bool = False,
        fallback: MarketplacePlatform = FALLBACK_PLATFORM,
    ):
        self._schemas: dict[str, IExportSchema] = {}
        self._strict = strict
        self._fallback = fallback
        for schema in schemas or []:
            self.register(schema)

    @classmethod
    def default(cls, strict: bool = False, vendor_name: str = DEFAULT_VENDOR) -> "SchemaRegistry":
        """Registry holding every built-in marketplace schema."""
        return cls(
            schemas=[
                ShopifySchema(vendor_name=vendor_name),
                EbaySchema(),
                EtsySchema(),
                AmazonSchema(),
                TikTokSchema(),
                HipStampSchema(),
            ],
            strict=strict,
        )

    @property
    def strict(self) -> bool:
        return self._strict

    def register(self, schema: IExportSchema) -> None:
        """Register (or replace) the schema for its platform."""
        self._schemas[schema.platform.value] = schema

    def get(self, name: str) -> IExportSchema | None:
        """Exact (case-insensitive) lookup without fallback."""
        return self._schemas.get(name.strip().lower())

    def resolve(self, name: str) -> IExportSchema:
        """
        Schema for a marketplace name.

        Args:
            name: Marketplace name as stored on the marketplace record
                ("eBay", "Shopify", ...).

        Returns:
            The matching schema, or the fallback schema for unknown names.

        Raises:
            UnsupportedMarketplaceError: If the name is unknown and the
                registry is strict.
        """
        schema = self.get(name)
        if schema is not None:
            return schema

        if self._strict or self._fallback.value not in self._schemas:
            raise UnsupportedMarketplaceError(name, supported=self.supported())

        logger.warning(
            f"No export schema for marketplace '{name}', "
            f"using the {self._fallback.value} layout"
        )
        return self._schemas[self._fallback.value]

    def supported(self) -> list[str]:
        """Registered marketplace names, in registration order."""
        return list(self._schemas.keys())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None
