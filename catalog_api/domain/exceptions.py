"""Domain exceptions.

All domain-level errors that represent business rule violations.
These exceptions are raised by services when input is rejected or
catalog invariants would be violated, and are translated to HTTP
responses at the API layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Raised when required fields are missing or malformed."""

    def __init__(
        self,
        message: str = "Invalid data provided in the request",
        field: str | None = None,
    ) -> None:
        """Initialize invalid input error.

        Args:
            message: Human-readable error message.
            field: Name of the offending field, if known.
        """
        super().__init__(message, details={"field": field} if field else None)


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when no record matches the given identifier or query."""

    pass


class ProductNotFoundError(NotFoundError):
    """Raised when a product does not exist."""

    def __init__(
        self,
        product_id: str,
        message: str = "No product found with the given ID.",
    ) -> None:
        """Initialize product not found error.

        Args:
            product_id: ID that was looked up.
            message: Human-readable error message.
        """
        super().__init__(message, details={"product_id": product_id})


class VariantNotFoundError(NotFoundError):
    """Raised when a variant does not exist."""

    def __init__(self, variant_id: str) -> None:
        """Initialize variant not found error.

        Args:
            variant_id: ID that was looked up.
        """
        super().__init__(
            "No variant found with the given ID.",
            details={"variant_id": variant_id},
        )


# ============================================================================
# Conflict Errors
# ============================================================================


class ConflictError(DomainError):
    """Base class for uniqueness violations."""

    pass


class DuplicateSkuError(ConflictError):
    """Raised when a variant SKU is already in use."""

    def __init__(self, sku_id: str) -> None:
        """Initialize duplicate SKU error.

        Args:
            sku_id: The colliding SKU.
        """
        super().__init__("SKU id already exists", details={"sku_id": sku_id})


class UserAlreadyExistsError(ConflictError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str) -> None:
        """Initialize user already exists error.

        Args:
            email: The registered email.
        """
        super().__init__("User already exists.", details={"email": email})


# ============================================================================
# State Errors
# ============================================================================


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the entity's current state."""

    pass


class ProductHasVariantsError(InvalidStateError):
    """Raised when deleting a product that still owns variants."""

    def __init__(self, product_id: str, variant_count: int) -> None:
        """Initialize product has variants error.

        Args:
            product_id: ID of the product.
            variant_count: Number of variants still attached.
        """
        super().__init__(
            "Please delete all the variants first before deleting this product.",
            details={"product_id": product_id, "variant_count": variant_count},
        )
