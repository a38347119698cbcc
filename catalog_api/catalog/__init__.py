"""Product Catalog Service.

Provides filter building, sort resolution, pagination and counting for
catalog page queries, plus the store clients they run against.
"""

from catalog_api.catalog.filters import FilterClause, FilterOperator, Predicate, build_predicate
from catalog_api.catalog.models import Product, ProductBrand, ProductType
from catalog_api.catalog.pagination import CountScope, Page
from catalog_api.catalog.query import QueryRequest
from catalog_api.catalog.repository import MongoCatalogStore
from catalog_api.catalog.sorting import SortDirection, SortDirective, resolve_sort
from catalog_api.catalog.store import CatalogStore, InMemoryCatalogStore

__all__ = [
    # Models
    "Product",
    "ProductBrand",
    "ProductType",
    # Query
    "QueryRequest",
    "FilterClause",
    "FilterOperator",
    "Predicate",
    "build_predicate",
    "SortDirection",
    "SortDirective",
    "resolve_sort",
    "CountScope",
    "Page",
    # Stores
    "CatalogStore",
    "InMemoryCatalogStore",
    "MongoCatalogStore",
]
