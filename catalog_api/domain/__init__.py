"""Domain layer module.

Contains the catalog exception hierarchy.
"""

from catalog_api.domain.exceptions import (
    CatalogError,
    InvalidPageRequestError,
    InvalidRequestError,
    InvalidSearchPatternError,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    StoreError,
    StoreTimeoutError,
    StoreUnavailableError,
)

__all__ = [
    "CatalogError",
    "InvalidPageRequestError",
    "InvalidRequestError",
    "InvalidSearchPatternError",
    "ProductAlreadyExistsError",
    "ProductNotFoundError",
    "StoreError",
    "StoreTimeoutError",
    "StoreUnavailableError",
]
