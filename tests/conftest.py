"""Shared fixtures for catalog tests."""

import pytest

from catalog_api.catalog.models import Product
from catalog_api.catalog.pagination import CountScope
from catalog_api.catalog.service import CatalogService
from catalog_api.catalog.store import InMemoryCatalogStore
from tests.factories import BRAND_ONE, BRAND_TWO, TYPE_ONE, TYPE_TWO, make_product


@pytest.fixture
def fruit_products() -> list[Product]:
    """Apple(10, B1), Banana(5, B2), Cherry(20, B2, T2)."""
    return [
        make_product("Apple", 10, BRAND_ONE, TYPE_ONE, product_id="p-apple"),
        make_product("Banana", 5, BRAND_TWO, TYPE_ONE, product_id="p-banana"),
        make_product("Cherry", 20, BRAND_TWO, TYPE_TWO, product_id="p-cherry"),
    ]


@pytest.fixture
def store(fruit_products: list[Product]) -> InMemoryCatalogStore:
    """In-memory store holding the fruit products."""
    return InMemoryCatalogStore(
        products=fruit_products,
        brands=[BRAND_ONE, BRAND_TWO],
        types=[TYPE_ONE, TYPE_TWO],
    )


@pytest.fixture
def service(store: InMemoryCatalogStore) -> CatalogService:
    """Catalog service counting against the applied filter."""
    return CatalogService(
        products=store,
        brands=store,
        types=store,
        writer=store,
        count_scope=CountScope.FILTERED,
    )


@pytest.fixture
def legacy_service(store: InMemoryCatalogStore) -> CatalogService:
    """Catalog service counting the whole collection."""
    return CatalogService(
        products=store,
        brands=store,
        types=store,
        writer=store,
        count_scope=CountScope.ALL,
    )
