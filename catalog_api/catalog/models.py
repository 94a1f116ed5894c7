"""SQLAlchemy models for product catalog.

Defines Product and ProductVariant tables for persistent storage.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.infrastructure.database import Base


class Product(Base):
    """Product entity in the catalog.

    Represents a sellable item. Its variants are kept in the order they
    were added.

    Attributes:
        id: Unique product identifier (UUID string).
        name: Product name.
        description: Product description.
        price: Base price (non-negative).
        variants: Variants owned by this product, in insertion order.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariant.position",
        collection_class=ordering_list("position"),
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"

    @property
    def variant_ids(self) -> list[str]:
        """Get variant IDs in insertion order."""
        return [v.id for v in self.variants]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation with variants resolved.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "variants": [v.to_dict() for v in self.variants],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class ProductVariant(Base):
    """Product variant (e.g., size, color combinations).

    Each variant belongs to exactly one product for its whole lifetime
    and carries a catalog-wide unique SKU.

    Attributes:
        id: Unique variant identifier.
        product_id: Owning product ID (immutable after creation).
        position: Index within the owning product's variant list.
        name: Variant name (e.g., "Red/9").
        sku_id: Stock Keeping Unit, unique across all variants.
        additional_cost: Price delta on top of the product price.
        stock_count: Units in stock.
    """

    __tablename__ = "product_variants"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    sku_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    additional_cost: Mapped[float] = mapped_column(Float, nullable=False)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="variants")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductVariant(id={self.id}, sku_id={self.sku_id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "sku_id": self.sku_id,
            "additional_cost": self.additional_cost,
            "stock_count": self.stock_count,
            "product": self.product_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
