"""API schemas for the Catalog API.

Pydantic models for request/response validation and serialization.
Every response is wrapped in the same envelope:
``{"success": bool, "message": str, "data": ...}``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ApiResponse(BaseModel):
    """Standard response envelope."""

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")


class ErrorResponse(ApiResponse):
    """Error response.

    Errors carry no data; the message never exposes internals.
    """

    success: bool = Field(default=False, description="Always false")


# ============================================================================
# Variant Schemas
# ============================================================================


class VariantCreateRequest(BaseModel):
    """Request to add a variant to a product."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(
        ...,
        alias="productId",
        min_length=1,
        description="Owning product ID",
    )
    name: str = Field(..., min_length=1, max_length=200, description="Variant name")
    sku_id: str = Field(
        ..., min_length=1, max_length=100, description="Catalog-wide unique SKU"
    )
    additional_cost: float = Field(
        ..., allow_inf_nan=False, description="Price delta on top of the product price"
    )
    count: int = Field(..., ge=0, description="Units in stock")


class VariantUpdateRequest(BaseModel):
    """Request to update a variant. At least one field is required."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    additional_cost: float | None = Field(default=None, allow_inf_nan=False)
    count: int | None = Field(default=None, ge=0)


class VariantSchema(BaseModel):
    """Variant representation."""

    id: str = Field(..., description="Variant ID")
    name: str = Field(..., description="Variant name")
    sku_id: str = Field(..., description="Stock Keeping Unit")
    additional_cost: float = Field(..., description="Price delta")
    stock_count: int = Field(..., description="Units in stock")
    product: str = Field(..., description="Owning product ID")
    created_at: datetime
    updated_at: datetime


class VariantResponse(ApiResponse):
    """Single variant response."""

    data: VariantSchema


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Base price")


class ProductUpdateRequest(BaseModel):
    """Request to update a product. At least one field is required."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class ProductSchema(BaseModel):
    """Product representation with variants resolved."""

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")
    price: float = Field(..., description="Base price")
    variants: list[VariantSchema] = Field(
        default_factory=list, description="Variants in the order they were added"
    )
    created_at: datetime
    updated_at: datetime


class ProductResponse(ApiResponse):
    """Single product response."""

    data: ProductSchema


class ProductListResponse(ApiResponse):
    """Product list response."""

    data: list[ProductSchema]


# ============================================================================
# Auth Schemas
# ============================================================================


class CredentialsRequest(BaseModel):
    """Email and password, used by both signup and signin."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=1024, description="Password")


class UserSchema(BaseModel):
    """Public user representation."""

    id: str
    email: str


class SignupResponse(ApiResponse):
    """Signup response."""

    data: UserSchema


class TokenSchema(BaseModel):
    """Issued access token."""

    token: str = Field(..., description="Bearer token for protected endpoints")
    token_type: str = Field(default="bearer")


class SigninResponse(ApiResponse):
    """Signin response."""

    data: TokenSchema
