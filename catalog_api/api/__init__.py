"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalog_api.api.auth import router as auth_router
from catalog_api.api.health import router as health_router
from catalog_api.api.products import router as products_router
from catalog_api.api.search import router as search_router
from catalog_api.api.variants import router as variants_router

__all__ = [
    "auth_router",
    "health_router",
    "products_router",
    "search_router",
    "variants_router",
]
