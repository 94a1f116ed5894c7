"""Product API endpoints.

Provides product CRUD:
- GET /api/products - list products with variants
- GET /api/product/{id} - product details
- POST /api/products - create a product
- PUT /api/product/{id} - update a product
- DELETE /api/product/{id} - delete a product without variants
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.schemas import (
    ErrorResponse,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductUpdateRequest,
    VariantSchema,
)
from catalog_api.catalog.models import Product, ProductVariant
from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.database import get_session

router = APIRouter(prefix="/api", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


# ============================================================================
# Converters
# ============================================================================


def variant_to_schema(variant: ProductVariant) -> VariantSchema:
    """Convert ProductVariant model to response schema."""
    return VariantSchema(**variant.to_dict())


def product_to_schema(product: Product) -> ProductSchema:
    """Convert Product model to response schema."""
    return ProductSchema(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        variants=[variant_to_schema(v) for v in product.variants],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List products",
    description="Get all products with their variants.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductListResponse:
    """List all products."""
    products = await service.list_products()
    return ProductListResponse(
        success=True,
        message="Data fetched successfully.",
        data=[product_to_schema(p) for p in products],
    )


@router.get(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a product by ID with its variants.

    Args:
        product_id: Product identifier.
        service: Catalog service.

    Returns:
        Product details.
    """
    product = await service.get_product(product_id)
    return ProductResponse(
        success=True,
        message="Product fetched successfully.",
        data=product_to_schema(product),
    )


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create product",
)
async def add_product(
    request: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Create a product with no variants."""
    product = await service.add_product(
        name=request.name,
        description=request.description,
        price=request.price,
    )
    return ProductResponse(
        success=True,
        message="Product added successfully.",
        data=product_to_schema(product),
    )


@router.put(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update product",
    description="Overwrite the supplied fields. At least one of name, description, price is required.",
)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Update a product."""
    product = await service.update_product(
        product_id,
        name=request.name,
        description=request.description,
        price=request.price,
    )
    return ProductResponse(
        success=True,
        message="Product updated successfully.",
        data=product_to_schema(product),
    )


@router.delete(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete product",
    description="Delete a product. Fails while the product still has variants.",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Delete a product."""
    product = await service.delete_product(product_id)
    return ProductResponse(
        success=True,
        message="Product deleted successfully.",
        data=product_to_schema(product),
    )
