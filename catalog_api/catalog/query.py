"""Catalog query request."""

from dataclasses import dataclass

from catalog_api.domain.exceptions import InvalidPageRequestError


@dataclass(frozen=True)
class QueryRequest:
    """Inbound catalog page query.

    Empty strings are treated the same as absent values for every
    optional field.

    Attributes:
        search: Regular expression matched against product names.
        brand_id: Exact brand ID filter.
        type_id: Exact product type ID filter.
        sort: Sort token ("priceAsc", "priceDesc", anything else sorts by name).
        page_size: Items per page.
        page_index: Page number (1-indexed).
    """

    search: str | None = None
    brand_id: str | None = None
    type_id: str | None = None
    sort: str | None = None
    page_size: int = 10
    page_index: int = 1

    def validate(self) -> None:
        """Fail fast on page parameters that would underflow the skip.

        Raises:
            InvalidPageRequestError: If page size or page index is below 1.
        """
        if self.page_size < 1 or self.page_index < 1:
            raise InvalidPageRequestError(self.page_size, self.page_index)
