"""
Marketplace export API endpoints.

Provides:
- POST /api/v1/exports/csv: Download a marketplace bulk-upload CSV
- GET /api/v1/exports/schemas: List supported marketplaces and their columns
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel, Field

from mrlister.api.deps import get_export_service, get_schema_registry
from mrlister.exporters.registry import SchemaRegistry
from mrlister.middleware.auth_middleware import get_current_user_id
from mrlister.services.export_service import ExportService

router = APIRouter(prefix="/exports", tags=["Exports"])


# ─── Request/Response Schemas ──────────────────────────────


class CsvExportRequest(BaseModel):
    """Request body for a CSV export."""
    marketplace_id: int = Field(..., description="Marketplace record to export for")
    item_ids: list[int] | None = Field(
        default=None,
        description="Items to include; omit to export all eligible items",
    )


class SchemaInfo(BaseModel):
    platform: str
    artifact: str
    headers: list[str]


class SchemaListResponse(BaseModel):
    schemas: list[SchemaInfo]
    strict: bool


# ─── Endpoints ─────────────────────────────────────────────


@router.post("/csv", summary="Generate a marketplace CSV export")
async def export_csv(
    request: CsvExportRequest,
    user_id: int = Depends(get_current_user_id),
    service: ExportService = Depends(get_export_service),
):
    """
    Generate a bulk-upload CSV for one of the caller's marketplaces.

    Items that do not resolve, belong to another user or are not in an
    exportable status are left out. Returns 404 if the marketplace is
    unknown or not owned by the caller.
    """
    artifact = await service.generate_export(
        marketplace_id=request.marketplace_id,
        item_ids=request.item_ids,
        user_id=user_id,
    )
    return Response(
        content=artifact.csv_content,
        media_type=artifact.media_type,
        headers={
            "Content-Disposition": artifact.content_disposition,
            "X-Export-Row-Count": str(artifact.row_count),
        },
    )


@router.get("/schemas", summary="List supported export schemas", response_model=SchemaListResponse)
async def list_schemas(registry: SchemaRegistry = Depends(get_schema_registry)):
    """Supported marketplace platforms with their column headers."""
    schemas = []
    for platform in registry.supported():
        schema = registry.get(platform)
        schemas.append(
            SchemaInfo(platform=platform, artifact=schema.artifact, headers=list(schema.headers))
        )
    return SchemaListResponse(schemas=schemas, strict=registry.strict)
