"""Catalog exceptions.

All catalog-level errors raised by the query engine, the catalog service
and the store clients. The API layer maps each class to an HTTP status
and a machine-readable error code.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    Attributes:
        error_code: Machine-readable error code used in API responses.
    """

    error_code = "CATALOG_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Request Errors
# ============================================================================


class InvalidRequestError(CatalogError):
    """Base class for malformed query requests."""

    error_code = "INVALID_REQUEST"


class InvalidPageRequestError(InvalidRequestError):
    """Raised when page size or page index is not a positive integer."""

    def __init__(self, page_size: int, page_index: int) -> None:
        """Initialize invalid page request error.

        Args:
            page_size: Requested page size.
            page_index: Requested 1-based page index.
        """
        super().__init__(
            f"Page size and page index must be positive, "
            f"got page_size={page_size}, page_index={page_index}",
            details={"page_size": page_size, "page_index": page_index},
        )


class InvalidSearchPatternError(InvalidRequestError):
    """Raised when the search text is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        """Initialize invalid search pattern error.

        Args:
            pattern: The rejected search pattern.
            reason: Why the pattern failed to compile.
        """
        super().__init__(
            f"Invalid search pattern {pattern!r}: {reason}",
            details={"pattern": pattern, "reason": reason},
        )


# ============================================================================
# Product Errors
# ============================================================================


class ProductNotFoundError(CatalogError):
    """Raised when a single product lookup finds nothing."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class ProductAlreadyExistsError(CatalogError):
    """Raised when inserting a product whose ID is already taken."""

    error_code = "PRODUCT_ALREADY_EXISTS"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product already exists: {product_id}",
            details={"product_id": product_id},
        )


# ============================================================================
# Store Errors
# ============================================================================


class StoreError(CatalogError):
    """Raised when a document store operation fails.

    Store errors are never retried by the catalog; they propagate to the
    caller unchanged.
    """

    error_code = "STORE_ERROR"

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize store error.

        Args:
            operation: Store operation that failed (e.g. "find", "count").
            reason: Underlying driver error message.
        """
        super().__init__(
            f"Store operation '{operation}' failed: {reason}",
            details={"operation": operation, "reason": reason},
        )
        self.operation = operation


class StoreUnavailableError(StoreError):
    """Raised when the document store cannot be reached."""

    error_code = "STORE_UNAVAILABLE"


class StoreTimeoutError(StoreError):
    """Raised when a document store operation times out."""

    error_code = "STORE_TIMEOUT"
