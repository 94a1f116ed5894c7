"""Product and variant repositories for database operations.

Provide CRUD and lookup queries for the catalog tables. Repositories
flush but never commit; the calling service owns the transaction.
"""

from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.catalog.models import Product, ProductVariant


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with database.session_factory() as session:
            repo = ProductRepository(session)
            product = await repo.get_by_id(product_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(
        self,
        product_id: str,
        include_variants: bool = True,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            include_variants: Whether to eagerly load variants.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if include_variants:
            query = query.options(selectinload(Product.variants))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(self) -> Sequence[Product]:
        """Get all products with their variants, oldest first."""
        query = (
            select(Product)
            .options(selectinload(Product.variants))
            .order_by(Product.created_at, Product.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def search(
        self,
        text: str,
        owner_product_id: str | None = None,
    ) -> Sequence[Product]:
        """Find products matching a text query.

        A product matches when its name or description contains the text
        (case-insensitive, taken literally), or when it is the given owner.

        Args:
            text: Substring to look for.
            owner_product_id: Product to include regardless of its text.

        Returns:
            Matching products with variants, oldest first.
        """
        conditions = [
            Product.name.icontains(text, autoescape=True),
            Product.description.icontains(text, autoescape=True),
        ]
        if owner_product_id is not None:
            conditions.append(Product.id == owner_product_id)

        query = (
            select(Product)
            .where(or_(*conditions))
            .options(selectinload(Product.variants))
            .order_by(Product.created_at, Product.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, product: Product) -> None:
        """Delete a product.

        Args:
            product: Product to delete.
        """
        await self.session.delete(product)
        await self.session.flush()


class VariantRepository:
    """Repository for ProductVariant database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, variant: ProductVariant) -> ProductVariant:
        """Save a variant to database.

        Args:
            variant: Variant to save.

        Returns:
            Saved variant.
        """
        self.session.add(variant)
        await self.session.flush()
        return variant

    async def get_by_id(
        self,
        variant_id: str,
        include_product: bool = False,
    ) -> ProductVariant | None:
        """Get variant by ID.

        Args:
            variant_id: Variant ID.
            include_product: Whether to eagerly load the owning product
                together with its full variant list.

        Returns:
            Variant if found, None otherwise.
        """
        query = select(ProductVariant).where(ProductVariant.id == variant_id)

        if include_product:
            query = query.options(
                selectinload(ProductVariant.product).selectinload(Product.variants)
            )

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_sku(self, sku_id: str) -> ProductVariant | None:
        """Get variant by SKU.

        Args:
            sku_id: Stock Keeping Unit.

        Returns:
            Variant if found, None otherwise.
        """
        query = select(ProductVariant).where(ProductVariant.sku_id == sku_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_first_by_name(self, name: str) -> ProductVariant | None:
        """Get the oldest variant whose name equals the given one exactly."""
        query = (
            select(ProductVariant)
            .where(ProductVariant.name == name)
            .order_by(ProductVariant.created_at, ProductVariant.id)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def delete(self, variant: ProductVariant) -> None:
        """Delete a variant.

        Args:
            variant: Variant to delete.
        """
        await self.session.delete(variant)
        await self.session.flush()
