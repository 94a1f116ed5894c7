"""Product Catalog Service.

Provides product and variant storage, the catalog consistency rules
between them, and keyword search.
"""

from catalog_api.catalog.models import Product, ProductVariant
from catalog_api.catalog.repository import ProductRepository, VariantRepository
from catalog_api.catalog.search import SearchService
from catalog_api.catalog.service import CatalogService

__all__ = [
    # Models
    "Product",
    "ProductVariant",
    # Repositories
    "ProductRepository",
    "VariantRepository",
    # Services
    "CatalogService",
    "SearchService",
]
