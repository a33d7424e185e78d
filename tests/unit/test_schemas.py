"""Tests for the per-marketplace export schemas and their helpers."""

from datetime import date

import pytest

from mrlister.core.models import MarketplacePlatform
from mrlister.exporters.amazon_schema import AmazonSchema, product_id_type
from mrlister.exporters.base_schema import (
    category_tags,
    dimensions_in_inches,
    export_filename,
    retail_barcode,
    sanitize_marketplace_name,
    truncate_words,
    weight_in_grams,
)
from mrlister.exporters.csv_writer import parse_csv, render_csv
from mrlister.exporters.ebay_schema import EbaySchema
from mrlister.exporters.etsy_schema import EtsySchema, etsy_tags
from mrlister.exporters.hipstamp_schema import HipStampSchema
from mrlister.exporters.shopify_schema import ShopifySchema, product_handle
from mrlister.exporters.tiktok_schema import TikTokSchema

# generate_barcode("MUS-90658"); fails the GS1 check
SYNTHESIZED_BARCODE = "906580000002"

ALL_SCHEMAS = [ShopifySchema(), EbaySchema(), EtsySchema(), AmazonSchema(), TikTokSchema(), HipStampSchema()]

EXPECTED_ARTIFACTS = {
    MarketplacePlatform.SHOPIFY: "products",
    MarketplacePlatform.EBAY: "listings",
    MarketplacePlatform.ETSY: "items",
    MarketplacePlatform.AMAZON: "inventory",
    MarketplacePlatform.TIKTOK: "products",
    MarketplacePlatform.HIPSTAMP: "stamps",
}


# ─── Helpers ─────────────────────────────────────────────────


class TestFilename:

    def test_sanitize(self):
        assert sanitize_marketplace_name("My eBay Store!") == "my_ebay_store_"

    def test_export_filename(self):
        name = export_filename(MarketplacePlatform.EBAY, "listings", "eBay", date(2026, 3, 9))
        assert name == "ebay_listings_ebay_20260309.csv"

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.platform.value)
    def test_schema_filename_uses_artifact(self, schema):
        name = schema.filename("Main Shop", date(2026, 1, 2))
        artifact = EXPECTED_ARTIFACTS[schema.platform]
        assert name == f"{schema.platform.value}_{artifact}_main_shop_20260102.csv"


class TestFieldHelpers:

    def test_truncate_words_at_boundary(self):
        assert truncate_words("Canon AE-1 Program 35mm Film Camera", 20) == "Canon AE-1 Program"

    def test_truncate_words_short_text_unchanged(self):
        assert truncate_words("Short", 80) == "Short"

    def test_weight_units(self):
        assert weight_in_grams("1.3 lb") == 590
        assert weight_in_grams("250 g") == 250
        assert weight_in_grams({"value": 2, "unit": "kg"}) == 2000
        assert weight_in_grams(12) == 12

    def test_weight_unparseable(self):
        assert weight_in_grams(None) is None
        assert weight_in_grams("heavy") is None
        assert weight_in_grams("3 stone") is None

    def test_weight_too_large_is_none(self):
        assert weight_in_grams("9" * 400 + " g") is None
        assert weight_in_grams({"value": 1e308, "unit": "kg"}) is None
        assert weight_in_grams({"value": 10 ** 400, "unit": "g"}) is None

    def test_dimensions_too_large_are_none(self):
        assert dimensions_in_inches("9" * 400 + " x 2 x 2 in") is None
        assert dimensions_in_inches({"length": 10 ** 400, "width": 1, "height": 1}) is None

    def test_dimensions(self):
        assert dimensions_in_inches("5.5 x 3.5 x 2 in") == (5.5, 3.5, 2.0)
        assert dimensions_in_inches(
            {"length": 25, "width": 15, "height": 5, "unit": "cm"}
        ) == (9.8, 5.9, 2.0)

    def test_dimensions_need_three_numbers(self):
        assert dimensions_in_inches("12 in") is None
        assert dimensions_in_inches(None) is None

    def test_category_tags_deduplicated(self, item_factory):
        item = item_factory(tags=["Vinyl", "beatles", "music"])
        assert category_tags(item) == "Music,Vinyl,Very Good,beatles"

    def test_product_handle(self):
        assert product_handle("VIN-00214") == "vin-00214"

    def test_product_id_type(self):
        assert product_id_type("036000291452") == "2"
        assert product_id_type("4006381333931") == "3"
        assert product_id_type("") == ""

    def test_retail_barcode(self, item_factory):
        assert retail_barcode(item_factory(barcode="036000291452")) == "036000291452"
        assert retail_barcode(item_factory(barcode=SYNTHESIZED_BARCODE)) == ""


# ─── Header Coverage ─────────────────────────────────────────


class TestHeaderCoverage:

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.platform.value)
    def test_row_keys_are_declared_headers(self, schema, sample_item):
        row = schema.map_row(sample_item)
        assert set(row) <= set(schema.headers)

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.platform.value)
    def test_every_line_has_header_field_count(self, schema, sample_item, item_factory):
        tricky = item_factory(
            id=9,
            sku="MUS-XXG-00009",
            title='12" single, "Let It Be"',
            description="Line one\nLine two, with comma",
            brand=None,
            tags=[],
            primary_image_url=None,
            additional_image_urls=[],
        )
        text = render_csv(schema.headers, [schema.map_row(sample_item), schema.map_row(tricky)])
        records = parse_csv(text)
        assert records[0] == list(schema.headers)
        assert len(records) == 3
        assert all(len(record) == len(schema.headers) for record in records)

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.platform.value)
    def test_oversized_measurements_leave_cells_empty(self, schema, item_factory):
        item = item_factory(
            weight={"value": 1e308, "unit": "kg"},
            dimensions="9" * 400 + " x 2 x 2 in",
        )
        row = schema.map_row(item)
        assert not any(str(value) == "inf" for value in row.values())

    def test_header_counts(self):
        counts = {s.platform: len(s.headers) for s in ALL_SCHEMAS}
        assert counts == {
            MarketplacePlatform.SHOPIFY: 37,
            MarketplacePlatform.EBAY: 16,
            MarketplacePlatform.ETSY: 25,
            MarketplacePlatform.AMAZON: 19,
            MarketplacePlatform.TIKTOK: 19,
            MarketplacePlatform.HIPSTAMP: 14,
        }

    def test_headers_unique(self):
        for schema in ALL_SCHEMAS:
            assert len(set(schema.headers)) == len(schema.headers)


# ─── Per-Marketplace Rows ────────────────────────────────────


class TestEbaySchema:

    def test_abbey_road_row(self, sample_item):
        row = EbaySchema().map_row(sample_item)
        assert row["Condition ID"] == 2000
        assert row["Custom Label (SKU)"] == "VIN-00214"
        assert row["Category ID"] == "11233"
        assert row["UPC"] == "002140000001"
        assert row["Item Photo URL"] == (
            "https://img.example.com/abbey-front.jpg|https://img.example.com/abbey-back.jpg"
        )

    def test_title_limited_to_80_chars(self, item_factory):
        item = item_factory(title="Vintage " * 20)
        assert len(EbaySchema().map_row(item)["Title"]) <= 80

    def test_brand_fallback(self, item_factory):
        assert EbaySchema().map_row(item_factory(brand=None))["C:Brand"] == "Unbranded"

    def test_synthesized_barcode_not_sent_as_upc(self, item_factory):
        row = EbaySchema().map_row(item_factory(barcode=SYNTHESIZED_BARCODE))
        assert row["UPC"] == ""


class TestShopifySchema:

    def test_row(self, sample_item):
        row = ShopifySchema(vendor_name="Attic Finds").map_row(sample_item)
        assert row["Handle"] == "vin-00214"
        assert row["Variant SKU"] == "VIN-00214"
        assert row["Variant Barcode"] == "002140000001"
        assert row["Vendor"] == "Apple Records"
        assert row["Google Shopping / Condition"] == "used"
        assert row["Google Shopping / Google Product Category"] == "Media > Music & Sound Recordings"
        assert row["Image Src"] == "https://img.example.com/abbey-front.jpg"

    def test_synthesized_barcode_kept(self, item_factory):
        row = ShopifySchema().map_row(item_factory(barcode=SYNTHESIZED_BARCODE))
        assert row["Variant Barcode"] == SYNTHESIZED_BARCODE

    def test_vendor_fallback(self, item_factory):
        row = ShopifySchema(vendor_name="Attic Finds").map_row(item_factory(brand=None))
        assert row["Vendor"] == "Attic Finds"

    def test_no_image(self, item_factory):
        row = ShopifySchema().map_row(
            item_factory(primary_image_url=None, additional_image_urls=[])
        )
        assert row["Image Src"] == ""
        assert row["Image Position"] is None


class TestEtsySchema:

    def test_row(self, item_factory):
        item = item_factory(weight="1.3 lb", dimensions="12.5 x 12.5 x 0.5 in", condition="new")
        row = EtsySchema().map_row(item)
        assert row["item_state"] == "new"
        assert row["item_weight"] == 590
        assert (row["item_length"], row["item_width"], row["item_height"]) == (12.5, 12.5, 0.5)
        assert row["image_1"] == "https://img.example.com/abbey-front.jpg"
        assert row["image_3"] == ""

    def test_tags_limited(self, item_factory):
        item = item_factory(tags=[f"tag number {i} that is long" for i in range(20)])
        tags = etsy_tags(item).split(",")
        assert len(tags) == 13
        assert all(len(tag) <= 20 for tag in tags)


class TestAmazonSchema:

    def test_row(self, item_factory):
        item = item_factory(barcode="036000291452", condition="excellent")
        row = AmazonSchema().map_row(item)
        assert row["product-id"] == "036000291452"
        assert row["product-id-type"] == "2"
        assert row["item-condition"] == "LikeNew"
        assert row["add-delete"] == "a"

    def test_synthesized_barcode_leaves_product_id_empty(self, item_factory):
        row = AmazonSchema().map_row(item_factory(barcode=SYNTHESIZED_BARCODE))
        assert row["product-id"] == ""
        assert row["product-id-type"] == ""

    def test_ean8_has_no_product_id_type(self, item_factory):
        row = AmazonSchema().map_row(item_factory(barcode="96385074"))
        assert (row["product-id"], row["product-id-type"]) == ("", "")


class TestTikTokSchema:

    def test_row(self, item_factory):
        item = item_factory(barcode="4006381333931", weight="1.3 lb", condition="Like New")
        row = TikTokSchema().map_row(item)
        assert row["Category"] == "Music > Vinyl"
        assert row["Condition"] == "Like New"
        assert row["GTIN Type"] == "EAN"
        assert row["Package Weight(lb)"] == 1.3
        assert row["Main Image"] == "https://img.example.com/abbey-front.jpg"
        assert row["Image 2"] == "https://img.example.com/abbey-back.jpg"

    def test_synthesized_barcode_has_no_gtin(self, item_factory):
        row = TikTokSchema().map_row(item_factory(barcode=SYNTHESIZED_BARCODE))
        assert row["GTIN Type"] == ""
        assert row["GTIN Code"] == ""


class TestHipStampSchema:

    def test_row_reads_ai_data(self, item_factory):
        item = item_factory(
            sku="STA-12345",
            category="Stamps",
            subcategory="United States",
            condition="new",
            ai_data={"country": "United States", "year": 1918, "catalog_number": "C3a"},
        )
        row = HipStampSchema().map_row(item)
        assert row["Condition"] == "Mint Never Hinged"
        assert row["Country"] == "United States"
        assert row["Year"] == 1918
        assert row["Catalog Number"] == "C3a"
        assert row["Category"] == "United States"

    def test_missing_ai_data_is_empty(self, sample_item):
        row = HipStampSchema().map_row(sample_item)
        assert row["Country"] is None

    def test_non_scalar_ai_data_is_empty(self, item_factory):
        item = item_factory(
            ai_data={"country": ["US", "CA"], "year": {"from": 1918}, "catalog_number": True}
        )
        row = HipStampSchema().map_row(item)
        assert (row["Country"], row["Year"], row["Catalog Number"]) == (None, None, None)
        assert "['US', 'CA']" not in render_csv(HipStampSchema.headers, [row])
