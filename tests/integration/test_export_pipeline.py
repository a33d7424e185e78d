"""
Integration tests for the intake → export pipeline.

Uses REAL IntakeService, ExportService, SchemaRegistry and QR encoder
against both inventory stores: the in-memory store and the SQL store
on an in-memory SQLite database.

Key differences from unit tests:
    - Nothing is mocked; identity is generated and rendered for real
    - Items travel through a store before being exported
    - Exported CSV is parsed back and checked column by column
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mrlister.core.models import AnalysisResult, IntakeOverrides, Marketplace
from mrlister.db.models import Base
from mrlister.exporters.csv_writer import parse_csv
from mrlister.exporters.registry import SchemaRegistry
from mrlister.identifiers.barcode import is_valid_barcode
from mrlister.services.export_service import ExportService
from mrlister.services.intake_service import IntakeService
from mrlister.storage.memory import InMemoryInventoryStore
from mrlister.storage.sql import SqlInventoryStore

SELLER_ID = 1
OTHER_SELLER_ID = 2


# ─── Fixtures ──────────────────────────────────────────────


@pytest.fixture(params=["memory", "sql"])
async def store(request):
    """Each test runs once per storage backend."""
    if request.param == "memory":
        yield InMemoryInventoryStore()
        return

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield SqlInventoryStore(session)
    await engine.dispose()


@pytest.fixture
def intake(store) -> IntakeService:
    return IntakeService(store)


@pytest.fixture
def exports(store) -> ExportService:
    return ExportService(store, SchemaRegistry.default())


def _analysis(**fields) -> AnalysisResult:
    data = {
        "title": "Abbey Road Vinyl",
        "description": "Original 1969 UK pressing.",
        "category": "Music > Vinyl",
        "condition": "Very Good",
        "suggestedPrice": 249.99,
        "brand": "Apple Records",
    }
    data.update(fields)
    return AnalysisResult.model_validate(data)


def _rows(csv_text: str) -> list[dict[str, str]]:
    header, *records = parse_csv(csv_text)
    return [dict(zip(header, record)) for record in records]


async def _marketplace(store, name: str, user_id: int = SELLER_ID) -> Marketplace:
    return await store.create_marketplace(Marketplace(user_id=user_id, name=name))


# ─── Pipeline ──────────────────────────────────────────────


class TestExportPipeline:

    async def test_listed_record_exports_to_ebay(self, store, intake, exports):
        await intake.create_item(
            SELLER_ID,
            _analysis(),
            IntakeOverrides(sku="VIN-00214", status="listed"),
        )
        ebay = await _marketplace(store, "eBay")

        artifact = await exports.generate_export(ebay.id, user_id=SELLER_ID)

        rows = _rows(artifact.csv_content)
        assert len(rows) == 1
        assert rows[0]["Custom Label (SKU)"] == "VIN-00214"
        assert rows[0]["Condition ID"] == "2000"
        assert rows[0]["Price"] == "249.99"
        assert artifact.file_name.startswith("ebay_listings_ebay_")

    @pytest.mark.parametrize("name", ["Shopify", "eBay", "Etsy", "Amazon", "TikTok", "HipStamp"])
    async def test_sold_item_excluded_everywhere(self, store, intake, exports, name):
        await intake.create_item(
            SELLER_ID,
            _analysis(title="Sony Walkman WM-2", category="Electronics"),
            IntakeOverrides(sku="ELE-SOXG-48213", quantity=0, status="sold"),
        )
        marketplace = await _marketplace(store, name)

        artifact = await exports.generate_export(marketplace.id, user_id=SELLER_ID)

        assert artifact.row_count == 0
        assert len(parse_csv(artifact.csv_content)) == 1

    async def test_generated_identity_survives_storage(self, store, intake):
        item = await intake.create_item(SELLER_ID, _analysis(category="Books"))

        assert item.sku.startswith("BOO-AP")
        assert is_valid_barcode(item.barcode)
        assert item.identity.qr_payload.sku == item.sku
        assert item.identity.qr_code.startswith("data:image/png;base64,")

        found = await intake.lookup_by_code(SELLER_ID, item.barcode)
        assert found.identity == item.identity

    async def test_unknown_marketplace_uses_ebay_layout(self, store, intake, exports):
        await intake.create_item(SELLER_ID, _analysis(), IntakeOverrides(status="active"))
        unknown = await _marketplace(store, "UnknownPlatform")
        ebay = await _marketplace(store, "eBay")

        unknown_export = await exports.generate_export(unknown.id, user_id=SELLER_ID)
        ebay_export = await exports.generate_export(ebay.id, user_id=SELLER_ID)

        assert parse_csv(unknown_export.csv_content)[0] == parse_csv(ebay_export.csv_content)[0]
        assert unknown_export.row_count == ebay_export.row_count == 1

    async def test_items_of_other_sellers_not_exported(self, store, intake, exports):
        mine = await intake.create_item(SELLER_ID, _analysis(), IntakeOverrides(status="active"))
        theirs = await intake.create_item(
            OTHER_SELLER_ID, _analysis(), IntakeOverrides(status="active")
        )
        shopify = await _marketplace(store, "Shopify")

        artifact = await exports.generate_export(
            shopify.id, item_ids=[theirs.id, mine.id], user_id=SELLER_ID
        )

        assert artifact.row_count == 1
        assert mine.sku in artifact.csv_content

    async def test_synthesized_barcode_stays_out_of_retail_columns(self, store, intake, exports):
        item = await intake.create_item(
            SELLER_ID, _analysis(), IntakeOverrides(sku="MUS-90658", status="listed")
        )
        assert item.barcode == "906580000002"

        columns = {}
        for name, header in (
            ("Amazon", "product-id"),
            ("TikTok", "GTIN Code"),
            ("eBay", "UPC"),
            ("Shopify", "Variant Barcode"),
        ):
            marketplace = await _marketplace(store, name)
            artifact = await exports.generate_export(marketplace.id, user_id=SELLER_ID)
            columns[name] = _rows(artifact.csv_content)[0][header]

        assert columns == {
            "Amazon": "",
            "TikTok": "",
            "eBay": "",
            "Shopify": "906580000002",
        }

    async def test_detected_retail_barcode_exported(self, store, intake, exports):
        await intake.create_item(
            SELLER_ID,
            _analysis(detectedBarcode="036000291452", barcodeType="UPC-A"),
            IntakeOverrides(status="listed"),
        )
        amazon = await _marketplace(store, "Amazon")

        row = _rows((await exports.generate_export(amazon.id, user_id=SELLER_ID)).csv_content)[0]

        assert row["product-id"] == "036000291452"
        assert row["product-id-type"] == "2"
