"""Catalog service for product and variant operations.

High-level service that combines repository operations with the
catalog's cross-entity rules:

- a variant can only be created for an existing product, and is
  appended to that product's variant list in the same transaction
- SKUs are unique across the whole catalog
- a product cannot be deleted while it still owns variants
- deleting a variant removes it from its product's variant list
"""

import math
from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import Product, ProductVariant
from catalog_api.catalog.repository import ProductRepository, VariantRepository
from catalog_api.domain.exceptions import (
    DuplicateSkuError,
    InvalidInputError,
    ProductHasVariantsError,
    ProductNotFoundError,
    VariantNotFoundError,
)

logger = structlog.get_logger()


# ============================================================================
# Input Validation
# ============================================================================


def _require_id(value: str | None, message: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(message, field="id")
    return str(value).strip()


def _check_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field=field)
    return value


def _check_number(value: Any, field: str, minimum: float | None = None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Invalid {field} in the request", field=field)
    if not math.isfinite(value) or (minimum is not None and value < minimum):
        raise InvalidInputError(f"Invalid {field} in the request", field=field)
    return float(value)


def _check_count(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"Invalid {field} in the request", field=field)
    return value


class CatalogService:
    """Service for catalog operations.

    Every mutating operation runs in the session's transaction and
    commits once at the end, so multi-row changes (variant plus owning
    product) land together or not at all.

    Example usage:
        async with database.session_factory() as session:
            service = CatalogService(session)
            product = await service.add_product(
                name="Shoe", description="Running shoe", price=49.99
            )
            await service.add_variant(
                product_id=product.id,
                name="Red/9",
                sku_id="SKU1",
                additional_cost=5,
                count=10,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.products = ProductRepository(session)
        self.variants = VariantRepository(session)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def list_products(self) -> Sequence[Product]:
        """Get all products with their variants resolved."""
        return await self.products.find_all()

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product with variants.

        Raises:
            ProductNotFoundError: If no product has this ID.
        """
        product = None
        if product_id and product_id.strip():
            product = await self.products.get_by_id(product_id.strip())
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def add_product(
        self,
        name: str,
        description: str,
        price: float,
    ) -> Product:
        """Create a product with an empty variant list.

        Args:
            name: Product name.
            description: Product description.
            price: Non-negative price.

        Returns:
            Created product.

        Raises:
            InvalidInputError: If a field is missing or malformed.
        """
        product = Product(
            name=_check_text(name, "name"),
            description=_check_text(description, "description"),
            price=_check_number(price, "price", minimum=0),
            variants=[],
        )
        await self.products.save(product)
        await self.session.commit()

        logger.info("Product created", product_id=product.id, name=product.name)
        return product

    async def update_product(
        self,
        product_id: str | None,
        name: str | None = None,
        description: str | None = None,
        price: float | None = None,
    ) -> Product:
        """Overwrite the supplied fields of a product.

        None means "not supplied"; a price of 0 is applied.

        Args:
            product_id: Product ID.
            name: New name.
            description: New description.
            price: New price.

        Returns:
            Updated product with variants.

        Raises:
            InvalidInputError: If the ID is missing, no field is supplied
                or a supplied field is malformed.
            ProductNotFoundError: If no product has this ID.
        """
        product_id = _require_id(product_id, "Invalid product id")

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _check_text(name, "name")
        if description is not None:
            changes["description"] = _check_text(description, "description")
        if price is not None:
            changes["price"] = _check_number(price, "price", minimum=0)
        if not changes:
            raise InvalidInputError()

        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, message="No product found with the given Id.")

        for field, value in changes.items():
            setattr(product, field, value)
        await self.session.flush()
        await self.session.commit()

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return product

    async def delete_product(self, product_id: str | None) -> Product:
        """Delete a product that has no variants.

        Args:
            product_id: Product ID.

        Returns:
            The removed product.

        Raises:
            InvalidInputError: If the ID is missing.
            ProductNotFoundError: If no product has this ID.
            ProductHasVariantsError: If the product still owns variants.
        """
        product_id = _require_id(product_id, "Invalid product ID")

        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if product.variants:
            logger.warning(
                "Product deletion blocked by variants",
                product_id=product_id,
                variant_count=len(product.variants),
            )
            raise ProductHasVariantsError(product_id, len(product.variants))

        await self.products.delete(product)
        await self.session.commit()

        logger.info("Product deleted", product_id=product_id)
        return product

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    async def add_variant(
        self,
        product_id: str | None,
        name: str,
        sku_id: str,
        additional_cost: float,
        count: int,
    ) -> ProductVariant:
        """Create a variant and append it to its product.

        Args:
            product_id: Owning product ID.
            name: Variant name.
            sku_id: Catalog-wide unique SKU.
            additional_cost: Price delta.
            count: Units in stock.

        Returns:
            Created variant.

        Raises:
            InvalidInputError: If a field is missing or malformed.
            DuplicateSkuError: If the SKU is already in use.
            ProductNotFoundError: If the owning product does not exist.
        """
        product_id = _require_id(product_id, "Invalid product id.")
        name = _check_text(name, "name")
        sku_id = _check_text(sku_id, "sku_id")
        cost = _check_number(additional_cost, "additional_cost")
        stock_count = _check_count(count, "count")

        if await self.variants.get_by_sku(sku_id) is not None:
            logger.warning("Duplicate SKU rejected", sku_id=sku_id)
            raise DuplicateSkuError(sku_id)

        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, message="Product not found")

        variant = ProductVariant(
            name=name,
            sku_id=sku_id,
            additional_cost=cost,
            stock_count=stock_count,
        )
        product.variants.append(variant)

        try:
            await self.variants.save(variant)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same SKU
            await self.session.rollback()
            logger.warning("Duplicate SKU rejected on insert", sku_id=sku_id)
            raise DuplicateSkuError(sku_id) from e

        logger.info(
            "Variant added",
            variant_id=variant.id,
            product_id=product_id,
            sku_id=sku_id,
        )
        return variant

    async def update_variant(
        self,
        variant_id: str | None,
        name: str | None = None,
        additional_cost: float | None = None,
        count: int | None = None,
    ) -> ProductVariant:
        """Overwrite the supplied fields of a variant.

        The owning product and the SKU cannot be changed.

        Args:
            variant_id: Variant ID.
            name: New name.
            additional_cost: New price delta.
            count: New stock count.

        Returns:
            Updated variant.

        Raises:
            InvalidInputError: If the ID is missing, no field is supplied
                or a supplied field is malformed.
            VariantNotFoundError: If no variant has this ID.
        """
        variant_id = _require_id(variant_id, "Invalid variant id")

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _check_text(name, "name")
        if additional_cost is not None:
            changes["additional_cost"] = _check_number(additional_cost, "additional_cost")
        if count is not None:
            changes["stock_count"] = _check_count(count, "count")
        if not changes:
            raise InvalidInputError()

        variant = await self.variants.get_by_id(variant_id)
        if variant is None:
            raise VariantNotFoundError(variant_id)

        for field, value in changes.items():
            setattr(variant, field, value)
        await self.session.flush()
        await self.session.commit()

        logger.info("Variant updated", variant_id=variant_id, fields=sorted(changes))
        return variant

    async def delete_variant(self, variant_id: str | None) -> ProductVariant:
        """Delete a variant and detach it from its product.

        Both changes are committed together. A variant whose product is
        already gone is still deleted.

        Args:
            variant_id: Variant ID.

        Returns:
            The removed variant.

        Raises:
            InvalidInputError: If the ID is missing.
            VariantNotFoundError: If no variant has this ID.
        """
        variant_id = _require_id(variant_id, "Invalid variant ID")

        variant = await self.variants.get_by_id(variant_id, include_product=True)
        if variant is None:
            raise VariantNotFoundError(variant_id)

        product = variant.product
        if product is not None:
            product.variants.remove(variant)
        else:
            logger.warning(
                "Associated product not found for variant",
                variant_id=variant_id,
                product_id=variant.product_id,
            )

        await self.variants.delete(variant)
        await self.session.commit()

        logger.info("Variant deleted", variant_id=variant_id, product_id=variant.product_id)
        return variant
