"""Search API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.products import product_to_schema
from catalog_api.api.schemas import ErrorResponse, ProductListResponse
from catalog_api.catalog.search import SearchService
from catalog_api.infrastructure.database import get_session

router = APIRouter(prefix="/api", tags=["Search"])


def get_search_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SearchService:
    """Get search service bound to the request session."""
    return SearchService(session)


@router.get(
    "/search",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Search products",
    description=(
        "Find products whose name or description contains the query "
        "(case-insensitive), or that own a variant named exactly the query."
    ),
)
async def search_products(
    service: Annotated[SearchService, Depends(get_search_service)],
    query: Annotated[str | None, Query(description="Search text")] = None,
) -> ProductListResponse:
    """Search the catalog."""
    products = await service.search(query)
    return ProductListResponse(
        success=True,
        message="Products found successfully.",
        data=[product_to_schema(p) for p in products],
    )
