"""
Pydantic ↔ ORM mapping helpers for MrLister.

Converts between domain models (InventoryItem, Marketplace) and the
SQLAlchemy ORM models of the same name. The item's ItemIdentity value
object is flattened onto identity columns on the way in and rebuilt on
the way out.

Usage:
    from mrlister.db.mappers import item_from_orm, orm_from_item

    orm = orm_from_item(item)
    item = item_from_orm(orm)
"""

from datetime import UTC, datetime

from mrlister.core.models import (
    DEFAULT_BARCODE_TYPE,
    InventoryItem,
    ItemIdentity,
    Marketplace,
    QrPayload,
)
from mrlister.db import models as orm


def _identity_from_orm(row: orm.InventoryItem) -> ItemIdentity:
    payload = QrPayload.model_validate(row.qr_payload) if row.qr_payload else None
    return ItemIdentity(
        sku=row.sku,
        barcode=row.barcode or "",
        barcode_type=row.barcode_type or DEFAULT_BARCODE_TYPE,
        qr_payload=payload,
        qr_code=row.qr_code or "",
    )


def item_columns(item: InventoryItem) -> dict:
    """
    Column values for an InventoryItem, suitable for repository create().

    The id is omitted so the database assigns it.
    """
    identity = item.identity
    return {
        "user_id": item.user_id,
        "sku": identity.sku,
        "barcode": identity.barcode,
        "barcode_type": identity.barcode_type,
        "qr_payload": identity.qr_payload.model_dump() if identity.qr_payload else None,
        "qr_code": identity.qr_code,
        "title": item.title,
        "description": item.description,
        "category": item.category,
        "subcategory": item.subcategory,
        "condition": item.condition,
        "brand": item.brand,
        "materials": list(item.materials),
        "tags": list(item.tags),
        "dimensions": item.dimensions,
        "weight": item.weight,
        "price": item.price,
        "original_price": item.original_price,
        "cost": item.cost,
        "quantity": item.quantity,
        "status": item.status,
        "primary_image_url": item.primary_image_url,
        "thumbnail_url": item.thumbnail_url,
        "additional_image_urls": list(item.additional_image_urls),
        "ai_generated": item.ai_generated,
        "ai_data": dict(item.ai_data),
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def orm_from_item(item: InventoryItem) -> orm.InventoryItem:
    """
    Map an InventoryItem domain model to a new (unsaved) ORM instance.

    Args:
        item: Domain item, usually fresh from intake.

    Returns:
        An InventoryItem ORM instance ready for session.add().
    """
    return orm.InventoryItem(**item_columns(item))


def item_from_orm(row: orm.InventoryItem) -> InventoryItem:
    """
    Map an InventoryItem ORM row back to the domain model.

    Handles None values from the database by substituting safe defaults,
    since JSON columns may hold null while Pydantic fields have defaults.
    """
    return InventoryItem(
        id=row.id,
        user_id=row.user_id,
        identity=_identity_from_orm(row),
        title=row.title,
        description=row.description or "",
        category=row.category or "",
        subcategory=row.subcategory,
        condition=row.condition or "",
        brand=row.brand,
        materials=row.materials if isinstance(row.materials, list) else [],
        tags=row.tags if isinstance(row.tags, list) else [],
        dimensions=row.dimensions,
        weight=row.weight,
        price=row.price or 0.0,
        original_price=row.original_price,
        cost=row.cost,
        quantity=row.quantity if row.quantity is not None else 1,
        status=row.status,
        primary_image_url=row.primary_image_url,
        thumbnail_url=row.thumbnail_url,
        additional_image_urls=(
            row.additional_image_urls if isinstance(row.additional_image_urls, list) else []
        ),
        ai_generated=bool(row.ai_generated),
        ai_data=row.ai_data if isinstance(row.ai_data, dict) else {},
        created_at=row.created_at or datetime.now(UTC),
        updated_at=row.updated_at or datetime.now(UTC),
    )


def orm_from_marketplace(marketplace: Marketplace) -> orm.Marketplace:
    """Map a Marketplace domain model to a new (unsaved) ORM instance."""
    return orm.Marketplace(
        user_id=marketplace.user_id,
        name=marketplace.name,
        is_connected=marketplace.is_connected,
        settings=dict(marketplace.settings),
        created_at=marketplace.created_at,
    )


def marketplace_from_orm(row: orm.Marketplace) -> Marketplace:
    """Map a Marketplace ORM row back to the domain model."""
    return Marketplace(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        is_connected=bool(row.is_connected),
        settings=row.settings if isinstance(row.settings, dict) else {},
        created_at=row.created_at or datetime.now(UTC),
    )
