"""Keyword search over the catalog."""

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import Product
from catalog_api.catalog.repository import ProductRepository, VariantRepository
from catalog_api.domain.exceptions import InvalidInputError, NotFoundError

logger = structlog.get_logger()


class SearchService:
    """Read-only product search.

    A product matches a query when its name or description contains the
    query (case-insensitive), or when it owns the first variant whose
    name is exactly the query.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.products = ProductRepository(session)
        self.variants = VariantRepository(session)

    async def search(self, query: str | None) -> Sequence[Product]:
        """Search products by keyword.

        Args:
            query: Search text.

        Returns:
            Matching products with variants resolved.

        Raises:
            InvalidInputError: If the query is missing or blank.
            NotFoundError: If nothing matches.
        """
        if query is None or not query.strip():
            raise InvalidInputError("Search query is required.", field="query")

        variant = await self.variants.find_first_by_name(query)
        products = await self.products.search(
            query,
            owner_product_id=variant.product_id if variant else None,
        )

        logger.info(
            "Catalog searched",
            query=query,
            variant_match=variant is not None,
            result_count=len(products),
        )

        if not products:
            raise NotFoundError(
                "No products found matching the search query.",
                details={"query": query},
            )
        return products
