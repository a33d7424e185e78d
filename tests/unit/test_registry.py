"""Tests for SchemaRegistry lookup and the unknown-marketplace policy."""

import logging

import pytest

from mrlister.core.exceptions import UnsupportedMarketplaceError
from mrlister.core.models import MarketplacePlatform
from mrlister.exporters.ebay_schema import EbaySchema
from mrlister.exporters.registry import SchemaRegistry
from mrlister.exporters.shopify_schema import ShopifySchema


class TestDefaultRegistry:

    def test_supports_all_platforms(self):
        registry = SchemaRegistry.default()
        assert registry.supported() == [p.value for p in (
            MarketplacePlatform.SHOPIFY,
            MarketplacePlatform.EBAY,
            MarketplacePlatform.ETSY,
            MarketplacePlatform.AMAZON,
            MarketplacePlatform.TIKTOK,
            MarketplacePlatform.HIPSTAMP,
        )]

    @pytest.mark.parametrize("name", ["eBay", "EBAY", "  ebay  "])
    def test_lookup_is_case_insensitive(self, name):
        assert SchemaRegistry.default().resolve(name).platform == MarketplacePlatform.EBAY

    def test_contains(self):
        registry = SchemaRegistry.default()
        assert "Etsy" in registry
        assert "UnknownPlatform" not in registry
        assert None not in registry

    def test_vendor_name_passed_to_shopify(self, sample_item):
        registry = SchemaRegistry.default(vendor_name="Attic Finds")
        row = registry.resolve("shopify").map_row(sample_item.model_copy(update={"brand": None}))
        assert row["Vendor"] == "Attic Finds"


class TestUnknownMarketplace:

    def test_falls_back_to_ebay_headers(self):
        registry = SchemaRegistry.default()
        assert registry.resolve("UnknownPlatform").headers == registry.resolve("eBay").headers

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mrlister.exporters.registry"):
            SchemaRegistry.default().resolve("Mercari")
        assert "Mercari" in caplog.text

    def test_strict_mode_raises(self):
        registry = SchemaRegistry.default(strict=True)
        with pytest.raises(UnsupportedMarketplaceError, match="UnknownPlatform") as exc_info:
            registry.resolve("UnknownPlatform")
        assert "ebay" in exc_info.value.supported

    def test_strict_mode_still_resolves_known(self):
        registry = SchemaRegistry.default(strict=True)
        assert registry.strict
        assert registry.resolve("Shopify").platform == MarketplacePlatform.SHOPIFY

    def test_no_fallback_registered_raises(self):
        registry = SchemaRegistry(schemas=[ShopifySchema()])
        with pytest.raises(UnsupportedMarketplaceError):
            registry.resolve("eBay")


class TestRegister:

    def test_register_replaces_existing(self):
        registry = SchemaRegistry(schemas=[EbaySchema()])
        replacement = EbaySchema()
        registry.register(replacement)
        assert registry.get("ebay") is replacement
        assert registry.supported() == ["ebay"]
