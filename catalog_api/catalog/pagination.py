"""Pagination, counting and page assembly.

Splits a page query into the slice fetch (filter, sort, skip, limit) and
the total count, then packages both into a ``Page``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from catalog_api.catalog.filters import Predicate
from catalog_api.catalog.models import Product
from catalog_api.catalog.query import QueryRequest
from catalog_api.catalog.sorting import SortDirective
from catalog_api.catalog.store import ProductReader

T = TypeVar("T")


class CountScope(str, Enum):
    """Which documents the page count covers.

    FILTERED counts only the documents matching the applied filter, so the
    page count describes the filtered view. ALL counts the whole collection
    regardless of search, brand or type, which is the legacy behavior.
    """

    FILTERED = "filtered"
    ALL = "all"


@dataclass(frozen=True)
class Page(Generic[T]):
    """Bounded, ordered slice of a result set.

    Attributes:
        page_size: Items per page, echoed from the request.
        page_index: Page number (1-indexed), echoed from the request.
        data: Items on this page, at most ``page_size`` of them.
        count: Total documents under the configured count scope.
    """

    page_size: int
    page_index: int
    data: list[T] = field(default_factory=list)
    count: int = 0

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.count + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page_index < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.page_index > 1


def compute_skip(page_size: int, page_index: int) -> int:
    """Number of documents preceding a 1-indexed page.

    Page 1 always skips 0.
    """
    return page_size * (page_index - 1)


async def fetch_page(
    reader: ProductReader,
    predicate: Predicate,
    sort: SortDirective,
    page_size: int,
    page_index: int,
) -> list[Product]:
    """Fetch one page of products.

    Args:
        reader: Product store capability.
        predicate: Filter to apply.
        sort: Ordering applied before skipping.
        page_size: Items per page.
        page_index: Page number (1-indexed).

    Returns:
        At most ``page_size`` products in sort order.
    """
    return await reader.find(
        predicate,
        sort,
        skip=compute_skip(page_size, page_index),
        limit=page_size,
    )


def count_predicate(scope: CountScope, predicate: Predicate) -> Predicate | None:
    """Pick the predicate the count runs against for a scope.

    Returns None for ``CountScope.ALL`` (count every document).
    """
    if scope is CountScope.ALL:
        return None
    return predicate


async def count_matching(reader: ProductReader, predicate: Predicate | None) -> int:
    """Count products matching a predicate; None counts the whole collection."""
    return await reader.count(predicate or Predicate.match_all())


def assemble_page(request: QueryRequest, data: list[T], count: int) -> Page[T]:
    """Package a result slice and count into a page."""
    return Page(
        page_size=request.page_size,
        page_index=request.page_index,
        data=data,
        count=count,
    )
