"""
Inventory API endpoints.

Provides:
- POST /api/v1/inventory/intake: Create an item from an AI analysis result
- GET /api/v1/inventory/lookup/{code}: Find an item by SKU or barcode

All endpoints identify the caller via the X-User-Id header.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from mrlister.api.deps import get_intake_service
from mrlister.core.models import AnalysisResult, IntakeOverrides, InventoryItem
from mrlister.middleware.auth_middleware import get_current_user_id
from mrlister.services.intake_service import IntakeService

router = APIRouter(prefix="/inventory", tags=["Inventory"])


# ─── Request/Response Schemas ──────────────────────────────


class IntakeRequest(BaseModel):
    """Request body for item intake."""
    analysis: AnalysisResult = Field(..., description="Vision-AI analysis of the item photo")
    overrides: IntakeOverrides | None = Field(
        default=None, description="User-entered values that win over the analysis"
    )


class ItemResponse(BaseModel):
    """Inventory item detail response."""

    id: int
    user_id: int
    sku: str
    barcode: str
    barcode_type: str
    qr_code: str
    metadata: dict[str, Any]
    title: str
    description: str
    category: str
    subcategory: str | None = None
    condition: str
    brand: str | None = None
    tags: list[str]
    materials: list[str]
    price: float
    original_price: float | None = None
    cost: float | None = None
    quantity: int
    status: str
    primary_image_url: str | None = None
    additional_image_urls: list[str]
    ai_generated: bool
    ai_data: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: InventoryItem) -> "ItemResponse":
        return cls(
            id=item.id,
            user_id=item.user_id,
            sku=item.sku,
            barcode=item.barcode,
            barcode_type=item.identity.barcode_type,
            qr_code=item.identity.qr_code,
            metadata=item.metadata,
            title=item.title,
            description=item.description,
            category=item.category,
            subcategory=item.subcategory,
            condition=item.condition,
            brand=item.brand,
            tags=item.tags,
            materials=item.materials,
            price=item.price,
            original_price=item.original_price,
            cost=item.cost,
            quantity=item.quantity,
            status=item.status,
            primary_image_url=item.primary_image_url,
            additional_image_urls=item.additional_image_urls,
            ai_generated=item.ai_generated,
            ai_data=item.ai_data,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


# ─── Endpoints ─────────────────────────────────────────────


@router.post(
    "/intake",
    summary="Create an item from an AI analysis",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemResponse,
)
async def intake_item(
    request: IntakeRequest,
    user_id: int = Depends(get_current_user_id),
    service: IntakeService = Depends(get_intake_service),
):
    """
    Create an inventory item from a photo analysis.

    Generates the SKU, barcode and QR code once; they never change
    afterwards. Returns 409 if an override SKU is already in use.
    """
    item = await service.create_item(user_id, request.analysis, request.overrides)
    return ItemResponse.from_item(item)


@router.get(
    "/lookup/{code}",
    summary="Find an item by SKU or barcode",
    response_model=ItemResponse,
)
async def lookup_item(
    code: str,
    user_id: int = Depends(get_current_user_id),
    service: IntakeService = Depends(get_intake_service),
):
    """
    Scanner lookup: match the code against SKUs first, then barcodes.

    Only the caller's own items are searched (tenant isolation).
    """
    item = await service.lookup_by_code(user_id, code)
    return ItemResponse.from_item(item)
