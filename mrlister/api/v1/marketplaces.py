"""
Marketplace connection endpoints.

Provides:
- POST /api/v1/marketplaces: Register a marketplace connection
- GET /api/v1/marketplaces: List the caller's marketplace connections

Marketplace authentication is mocked; a connection is just a named record
that exports are requested against.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from mrlister.api.deps import get_schema_registry, get_store
from mrlister.core.interfaces import IInventoryStore
from mrlister.core.models import Marketplace
from mrlister.exporters.registry import SchemaRegistry
from mrlister.middleware.auth_middleware import get_current_user_id

router = APIRouter(prefix="/marketplaces", tags=["Marketplaces"])


# ─── Request/Response Schemas ──────────────────────────────


class MarketplaceCreateRequest(BaseModel):
    """Request body for registering a marketplace."""
    name: str = Field(..., min_length=1, max_length=100, description="e.g. eBay, Shopify, Etsy")
    is_connected: bool = True
    settings: dict[str, Any] = Field(default_factory=dict)


class MarketplaceResponse(BaseModel):
    id: int
    name: str
    is_connected: bool
    settings: dict[str, Any]
    export_supported: bool
    created_at: datetime


def _to_response(marketplace: Marketplace, registry: SchemaRegistry) -> MarketplaceResponse:
    return MarketplaceResponse(
        id=marketplace.id,
        name=marketplace.name,
        is_connected=marketplace.is_connected,
        settings=marketplace.settings,
        export_supported=marketplace.name in registry,
        created_at=marketplace.created_at,
    )


# ─── Endpoints ─────────────────────────────────────────────


@router.post(
    "",
    summary="Register a marketplace connection",
    status_code=status.HTTP_201_CREATED,
    response_model=MarketplaceResponse,
)
async def create_marketplace(
    request: MarketplaceCreateRequest,
    user_id: int = Depends(get_current_user_id),
    store: IInventoryStore = Depends(get_store),
    registry: SchemaRegistry = Depends(get_schema_registry),
):
    """Create a marketplace record owned by the caller."""
    marketplace = await store.create_marketplace(
        Marketplace(
            user_id=user_id,
            name=request.name.strip(),
            is_connected=request.is_connected,
            settings=request.settings,
        )
    )
    return _to_response(marketplace, registry)


@router.get("", summary="List marketplace connections")
async def list_marketplaces(
    user_id: int = Depends(get_current_user_id),
    store: IInventoryStore = Depends(get_store),
    registry: SchemaRegistry = Depends(get_schema_registry),
):
    """List the caller's marketplaces with whether a dedicated export schema exists."""
    marketplaces = await store.list_marketplaces_by_user(user_id)
    return {
        "marketplaces": [_to_response(m, registry) for m in marketplaces],
        "total": len(marketplaces),
    }
