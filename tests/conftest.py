"""
Shared test fixtures for the MrLister test suite.
"""

import pytest

from mrlister.core.interfaces import IQrEncoder
from mrlister.core.models import (
    AnalysisResult,
    InventoryItem,
    ItemIdentity,
    Marketplace,
    QrPayload,
)
from mrlister.storage.memory import InMemoryInventoryStore


class StubQrEncoder(IQrEncoder):
    """Records payloads instead of rendering PNGs."""

    def __init__(self):
        self.payloads: list[QrPayload] = []

    def encode(self, payload: QrPayload) -> str:
        self.payloads.append(payload)
        return f"data:stub,{payload.sku}"


def make_item(**overrides) -> InventoryItem:
    """Build an InventoryItem with sensible defaults; keyword args override."""
    sku = overrides.pop("sku", "VIN-00214")
    barcode = overrides.pop("barcode", "002140000001")
    data = {
        "id": 1,
        "user_id": 1,
        "identity": ItemIdentity(sku=sku, barcode=barcode),
        "title": "Abbey Road Vinyl",
        "description": "Original 1969 UK pressing, gatefold sleeve.",
        "category": "Music",
        "subcategory": "Vinyl",
        "condition": "Very Good",
        "brand": "Apple Records",
        "tags": ["beatles", "vinyl"],
        "price": 249.99,
        "quantity": 1,
        "status": "listed",
        "primary_image_url": "https://img.example.com/abbey-front.jpg",
        "additional_image_urls": ["https://img.example.com/abbey-back.jpg"],
    }
    data.update(overrides)
    return InventoryItem(**data)


@pytest.fixture
def item_factory():
    """Factory fixture: call with keyword overrides to build an InventoryItem."""
    return make_item


@pytest.fixture
def sample_item() -> InventoryItem:
    """The Abbey Road record: listed, very good condition."""
    return make_item()


@pytest.fixture
def sold_item() -> InventoryItem:
    """A sold-out item that must never be exported."""
    return make_item(
        id=2,
        sku="ELE-SOXG-48213",
        barcode="",
        title="Sony Walkman WM-2",
        category="Electronics",
        subcategory="Portable Audio",
        condition="Good",
        brand="Sony",
        price=180.0,
        quantity=0,
        status="sold",
    )


@pytest.fixture
def sample_analysis() -> AnalysisResult:
    """Vision-AI output for a vintage camera, in the collaborator's camelCase."""
    return AnalysisResult.model_validate(
        {
            "title": "Canon AE-1 Program 35mm Film Camera",
            "description": "Working body with 50mm f/1.8 lens.",
            "category": "Electronics > Cameras > Film Cameras",
            "condition": "Excellent",
            "suggestedPrice": 189.5,
            "priceRange": {"min": 150, "max": 220},
            "brand": "Canon",
            "features": ["50mm lens", "program mode"],
            "keywords": ["canon", "film camera", "canon", "35mm"],
            "detectedBarcode": None,
            "barcodeType": None,
            "dimensions": "5.5 x 3.5 x 2 in",
            "weight": "1.3 lb",
            "materials": ["metal", "plastic"],
        }
    )


@pytest.fixture
def stub_qr_encoder() -> StubQrEncoder:
    return StubQrEncoder()


@pytest.fixture
def memory_store() -> InMemoryInventoryStore:
    return InMemoryInventoryStore()


@pytest.fixture
async def ebay_marketplace(memory_store) -> Marketplace:
    return await memory_store.create_marketplace(Marketplace(user_id=1, name="eBay"))
