"""Variant API endpoints.

- POST /api/variant - add a variant to a product
- PUT /api/variant/{id} - update a variant
- DELETE /api/variant/{id} - delete a variant
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from catalog_api.api.products import get_catalog_service, variant_to_schema
from catalog_api.api.schemas import (
    ErrorResponse,
    VariantCreateRequest,
    VariantResponse,
    VariantUpdateRequest,
)
from catalog_api.catalog.service import CatalogService

router = APIRouter(prefix="/api/variant", tags=["Variants"])


@router.post(
    "",
    response_model=VariantResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Add variant",
    description="Create a variant for an existing product. The SKU must be unused.",
)
async def add_variant(
    request: VariantCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> VariantResponse:
    """Add a variant to the product given by productId."""
    variant = await service.add_variant(
        product_id=request.product_id,
        name=request.name,
        sku_id=request.sku_id,
        additional_cost=request.additional_cost,
        count=request.count,
    )
    return VariantResponse(
        success=True,
        message="Variant added successfully.",
        data=variant_to_schema(variant),
    )


@router.put(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update variant",
)
async def update_variant(
    variant_id: str,
    request: VariantUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> VariantResponse:
    """Update name, additional cost or stock count of a variant."""
    variant = await service.update_variant(
        variant_id,
        name=request.name,
        additional_cost=request.additional_cost,
        count=request.count,
    )
    return VariantResponse(
        success=True,
        message="Variant updated successfully.",
        data=variant_to_schema(variant),
    )


@router.delete(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete variant",
)
async def delete_variant(
    variant_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> VariantResponse:
    """Delete a variant and remove it from its product."""
    variant = await service.delete_variant(variant_id)
    return VariantResponse(
        success=True,
        message="Variant deleted successfully.",
        data=variant_to_schema(variant),
    )
