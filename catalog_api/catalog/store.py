"""Document store capabilities for the catalog.

Each capability is a narrow abstract interface. Store clients compose the
ones they support; the query engine only depends on ``ProductReader``.

``InMemoryCatalogStore`` evaluates predicates in Python with the same
semantics as the MongoDB client (unanchored regex search, dotted field
paths, ``id`` as a secondary ascending ordering). Search patterns are
compiled with Python's ``re`` rather than PCRE, so PCRE-only syntax such as
``\\p{Lu}`` is rejected here while MongoDB accepts it; the in-memory store
is meant for tests and local development only.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from bson import ObjectId

from catalog_api.catalog.filters import FilterClause, FilterOperator, Predicate
from catalog_api.catalog.models import Product, ProductBrand, ProductType
from catalog_api.catalog.sorting import SortDirective
from catalog_api.domain.exceptions import (
    InvalidSearchPatternError,
    ProductAlreadyExistsError,
)


# ============================================================================
# Capabilities
# ============================================================================


class ProductReader(ABC):
    """Read access to the product collection."""

    @abstractmethod
    async def find(
        self,
        predicate: Predicate,
        sort: SortDirective,
        skip: int,
        limit: int,
    ) -> list[Product]:
        """Find products matching a predicate, ordered and sliced.

        Args:
            predicate: Filter to apply.
            sort: Ordering applied before skip/limit.
            skip: Number of matching documents to skip.
            limit: Maximum number of documents to return.

        Returns:
            Ordered list of at most ``limit`` products.
        """

    @abstractmethod
    async def count(self, predicate: Predicate) -> int:
        """Count products matching a predicate."""

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Product | None:
        """Get a product by ID."""

    @abstractmethod
    async def find_by_name(self, name: str) -> list[Product]:
        """Find products with exactly this name."""

    @abstractmethod
    async def find_by_brand_name(self, brand_name: str) -> list[Product]:
        """Find products whose embedded brand has exactly this name."""


class BrandReader(ABC):
    """Read access to the brand collection."""

    @abstractmethod
    async def list_brands(self) -> list[ProductBrand]:
        """List all brands."""


class TypeReader(ABC):
    """Read access to the product type collection."""

    @abstractmethod
    async def list_types(self) -> list[ProductType]:
        """List all product types."""


class ProductWriter(ABC):
    """Write access to the product collection."""

    @abstractmethod
    async def insert(self, product: Product) -> Product:
        """Insert a product, assigning an ID when it has none.

        Raises:
            ProductAlreadyExistsError: If the ID is already taken.
        """

    @abstractmethod
    async def replace(self, product: Product) -> bool:
        """Replace a product by ID.

        Returns:
            True if a document was found and modified.
        """

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Delete a product by ID.

        Returns:
            True if a document was deleted.
        """


class ReferenceWriter(ABC):
    """Write access to the brand and type collections (used for seeding)."""

    @abstractmethod
    async def insert_brands(self, brands: list[ProductBrand]) -> None:
        """Insert brand documents."""

    @abstractmethod
    async def insert_types(self, types: list[ProductType]) -> None:
        """Insert product type documents."""


class CatalogStore(
    ProductReader,
    BrandReader,
    TypeReader,
    ProductWriter,
    ReferenceWriter,
):
    """Full catalog store client: every capability plus a health probe."""

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store is reachable."""


# ============================================================================
# In-Memory Store
# ============================================================================


def resolve_field(product: Product, path: str) -> Any:
    """Resolve a dotted field path on a product.

    Args:
        product: Product to read.
        path: Dotted path such as "brand.id".

    Returns:
        Field value, or None when any segment is missing.
    """
    value: Any = product
    for part in path.split("."):
        value = getattr(value, part, None)
        if value is None:
            return None
    return value


def compile_pattern(clause: FilterClause) -> re.Pattern[str]:
    """Compile a REGEX clause with Python's ``re``.

    Raises:
        InvalidSearchPatternError: If the pattern does not compile.
    """
    flags = re.IGNORECASE if clause.case_insensitive else 0
    try:
        return re.compile(clause.value, flags)
    except re.error as e:
        raise InvalidSearchPatternError(clause.value, str(e)) from e


def matches_clause(product: Product, clause: FilterClause) -> bool:
    """Evaluate one filter clause against a product."""
    value = resolve_field(product, clause.field)
    if value is None:
        return False

    if clause.operator is FilterOperator.REGEX:
        return compile_pattern(clause).search(str(value)) is not None

    return value == clause.value


def matches(product: Product, predicate: Predicate) -> bool:
    """Evaluate a predicate against a product (all clauses must hold)."""
    return all(matches_clause(product, clause) for clause in predicate.clauses)


class InMemoryCatalogStore(CatalogStore):
    """Catalog store backed by in-process dictionaries.

    Used for tests and local development. Insertion order is kept for
    brands and types, like a collection's natural order.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        brands: Iterable[ProductBrand] = (),
        types: Iterable[ProductType] = (),
    ) -> None:
        self._products: dict[str, Product] = {}
        self._brands: list[ProductBrand] = list(brands)
        self._types: list[ProductType] = list(types)

        for product in products:
            product = self._with_id(product)
            self._products[product.id] = product  # type: ignore[index]

    @staticmethod
    def _with_id(product: Product) -> Product:
        if product.id:
            return product
        return product.model_copy(update={"id": str(ObjectId())})

    def _matching(self, predicate: Predicate) -> list[Product]:
        # Reject bad patterns even when there is nothing to match against
        for clause in predicate.clauses:
            if clause.operator is FilterOperator.REGEX:
                compile_pattern(clause)
        return [p for p in self._products.values() if matches(p, predicate)]

    async def find(
        self,
        predicate: Predicate,
        sort: SortDirective,
        skip: int,
        limit: int,
    ) -> list[Product]:
        # Two stable passes: id ascending breaks ties on the sort field
        ordered = sorted(self._matching(predicate), key=lambda p: p.id or "")
        ordered.sort(
            key=lambda p: resolve_field(p, sort.field),
            reverse=sort.descending,
        )
        return ordered[skip : skip + limit]

    async def count(self, predicate: Predicate) -> int:
        return len(self._matching(predicate))

    async def get_by_id(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    async def find_by_name(self, name: str) -> list[Product]:
        return [p for p in self._products.values() if p.name == name]

    async def find_by_brand_name(self, brand_name: str) -> list[Product]:
        return [p for p in self._products.values() if p.brand.name == brand_name]

    async def list_brands(self) -> list[ProductBrand]:
        return list(self._brands)

    async def list_types(self) -> list[ProductType]:
        return list(self._types)

    async def insert(self, product: Product) -> Product:
        product = self._with_id(product)
        if product.id in self._products:
            raise ProductAlreadyExistsError(product.id)  # type: ignore[arg-type]
        self._products[product.id] = product  # type: ignore[index]
        return product

    async def replace(self, product: Product) -> bool:
        existing = self._products.get(product.id or "")
        if existing is None:
            return False
        self._products[product.id] = product  # type: ignore[index]
        return existing != product

    async def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    async def insert_brands(self, brands: list[ProductBrand]) -> None:
        self._brands.extend(brands)

    async def insert_types(self, types: list[ProductType]) -> None:
        self._types.extend(types)

    async def ping(self) -> bool:
        return True
