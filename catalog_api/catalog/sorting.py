"""Sort token resolution.

Maps the closed set of sort tokens accepted by the catalog onto concrete
sort directives. Unknown or missing tokens fall back to name ascending.
"""

from dataclasses import dataclass
from enum import IntEnum

from catalog_api.catalog.filters import NAME_FIELD, PRICE_FIELD


class SortDirection(IntEnum):
    """Sort direction, valued like the MongoDB driver constants."""

    ASCENDING = 1
    DESCENDING = -1


@dataclass(frozen=True)
class SortDirective:
    """Ordering applied before pagination.

    Attributes:
        field: Document field path to order by.
        direction: Ascending or descending.
    """

    field: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING


DEFAULT_SORT = SortDirective(NAME_FIELD, SortDirection.ASCENDING)

SORT_TOKENS: dict[str, SortDirective] = {
    "priceAsc": SortDirective(PRICE_FIELD, SortDirection.ASCENDING),
    "priceDesc": SortDirective(PRICE_FIELD, SortDirection.DESCENDING),
}


def resolve_sort(token: str | None) -> SortDirective:
    """Resolve a sort token to a directive.

    Never fails: anything outside ``SORT_TOKENS`` yields ``DEFAULT_SORT``.

    Args:
        token: Sort token from the request, possibly empty or None.

    Returns:
        Sort directive.
    """
    if not token:
        return DEFAULT_SORT
    return SORT_TOKENS.get(token, DEFAULT_SORT)
