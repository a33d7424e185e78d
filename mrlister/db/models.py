"""
SQLAlchemy 2.0 ORM models for MrLister.

All models use the modern Mapped/mapped_column syntax.
Multi-tenant isolation is enforced by scoping all queries through user_id
at the repository layer.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Unicode,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


# ─── Users ────────────────────────────────────────────────────


class User(Base):
    """User account: the multi-tenant root entity."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Unicode(320), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    # Relationships
    marketplaces: Mapped[list["Marketplace"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    inventory_items: Mapped[list["InventoryItem"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )


# ─── Marketplaces ─────────────────────────────────────────────


class Marketplace(Base):
    """A user's marketplace connection (authentication is mocked)."""

    __tablename__ = "marketplaces"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Unicode(100), nullable=False)
    is_connected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    settings: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="marketplaces")

    __table_args__ = (
        Index("ix_marketplaces_user_id", "user_id"),
    )


# ─── Inventory ────────────────────────────────────────────────


class InventoryItem(Base):
    """A catalogued physical item and its generated identifiers."""

    __tablename__ = "inventory_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Identity: written once at intake
    sku: Mapped[str] = mapped_column(String(64), nullable=False)
    barcode: Mapped[str] = mapped_column(String(32), default="", nullable=False)
    barcode_type: Mapped[str] = mapped_column(String(20), default="EAN-13", nullable=False)
    qr_payload: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    qr_code: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Descriptive
    title: Mapped[str] = mapped_column(Unicode(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    category: Mapped[str] = mapped_column(Unicode(200), default="", nullable=False)
    subcategory: Mapped[str | None] = mapped_column(Unicode(300), nullable=True)
    condition: Mapped[str] = mapped_column(Unicode(50), default="", nullable=False)
    brand: Mapped[str | None] = mapped_column(Unicode(200), nullable=True)
    materials: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    dimensions: Mapped[dict | str | None] = mapped_column(JSON, nullable=True)
    weight: Mapped[dict | str | float | None] = mapped_column(JSON, nullable=True)

    # Commercial
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    original_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="draft", nullable=False)

    # Media
    primary_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_image_urls: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    ai_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    ai_data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="inventory_items")

    __table_args__ = (
        Index("ix_inventory_items_user_sku", "user_id", "sku", unique=True),
        Index("ix_inventory_items_user_status", "user_id", "status"),
        Index("ix_inventory_items_user_barcode", "user_id", "barcode"),
    )
