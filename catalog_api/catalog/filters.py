"""Filter building for catalog queries.

A predicate is an ordered tuple of ``(field, operator, value)`` clauses
combined by logical AND. It carries no store-specific syntax; each store
client renders or evaluates it on its own.
"""

from dataclasses import dataclass
from enum import Enum
from functools import reduce

from catalog_api.catalog.query import QueryRequest

# Document field paths understood by every store client
NAME_FIELD = "name"
PRICE_FIELD = "price"
BRAND_ID_FIELD = "brand.id"
TYPE_ID_FIELD = "type.id"


class FilterOperator(str, Enum):
    """Supported clause operators."""

    REGEX = "regex"
    EQ = "eq"


@dataclass(frozen=True)
class FilterClause:
    """Single filter clause.

    Attributes:
        field: Dotted document field path.
        operator: Comparison operator.
        value: Operand; a pattern for REGEX, an exact value for EQ.
        case_insensitive: Only meaningful for REGEX clauses.
    """

    field: str
    operator: FilterOperator
    value: str
    case_insensitive: bool = False


@dataclass(frozen=True)
class Predicate:
    """Conjunction of filter clauses. The empty predicate matches everything."""

    clauses: tuple[FilterClause, ...] = ()

    def and_(self, clause: FilterClause) -> "Predicate":
        """Return a new predicate with ``clause`` ANDed in."""
        return Predicate(clauses=self.clauses + (clause,))

    @property
    def is_empty(self) -> bool:
        return not self.clauses

    @classmethod
    def match_all(cls) -> "Predicate":
        return cls()


def build_predicate(
    request: QueryRequest,
    case_insensitive: bool = False,
) -> Predicate:
    """Translate a query request into a predicate.

    Search, brand and type filters are ANDed in that order, each only when
    its request field is non-empty.

    Args:
        request: Catalog query request.
        case_insensitive: Whether the name search ignores case.

    Returns:
        Predicate over product fields.

    The search text is passed through as a pattern in the store's own regex
    dialect; store clients reject patterns their engine cannot compile.
    """
    fragments: list[FilterClause | None] = [
        (
            FilterClause(NAME_FIELD, FilterOperator.REGEX, request.search, case_insensitive)
            if request.search
            else None
        ),
        (
            FilterClause(BRAND_ID_FIELD, FilterOperator.EQ, request.brand_id)
            if request.brand_id
            else None
        ),
        (
            FilterClause(TYPE_ID_FIELD, FilterOperator.EQ, request.type_id)
            if request.type_id
            else None
        ),
    ]

    return reduce(
        Predicate.and_,
        [clause for clause in fragments if clause is not None],
        Predicate.match_all(),
    )
