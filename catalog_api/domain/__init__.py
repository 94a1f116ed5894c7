"""Domain layer - business rule violations shared by all services.

Example usage:
    from catalog_api.domain import ProductNotFoundError

    raise ProductNotFoundError(product_id)
"""

from catalog_api.domain.exceptions import (
    ConflictError,
    DomainError,
    DuplicateSkuError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    ProductHasVariantsError,
    ProductNotFoundError,
    UserAlreadyExistsError,
    VariantNotFoundError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "DuplicateSkuError",
    "InvalidInputError",
    "InvalidStateError",
    "NotFoundError",
    "ProductHasVariantsError",
    "ProductNotFoundError",
    "UserAlreadyExistsError",
    "VariantNotFoundError",
]
