"""Tests for catalog seeding."""

import pytest

from catalog_api.catalog.filters import Predicate
from catalog_api.catalog.seed import BRANDS, PRODUCTS, TYPES, seed_catalog
from catalog_api.catalog.store import InMemoryCatalogStore


class TestSeedData:
    """Tests for the bundled seed data."""

    def test_products_reference_known_brands_and_types(self) -> None:
        assert {p.brand for p in PRODUCTS} <= set(BRANDS)
        assert {p.type for p in PRODUCTS} <= set(TYPES)

    def test_product_ids_are_unique(self) -> None:
        ids = [p.id for p in PRODUCTS]
        assert len(ids) == len(set(ids))


class TestSeedCatalog:
    """Tests for seed_catalog."""

    @pytest.mark.asyncio
    async def test_seeds_empty_store(self) -> None:
        store = InMemoryCatalogStore()

        result = await seed_catalog(store)

        assert result == {
            "brands": len(BRANDS),
            "types": len(TYPES),
            "products": len(PRODUCTS),
        }
        assert await store.count(Predicate.match_all()) == len(PRODUCTS)

    @pytest.mark.asyncio
    async def test_second_run_inserts_nothing(self) -> None:
        store = InMemoryCatalogStore()
        await seed_catalog(store)

        result = await seed_catalog(store)

        assert result == {"brands": 0, "types": 0, "products": 0}
        assert len(await store.list_brands()) == len(BRANDS)

    @pytest.mark.asyncio
    async def test_populated_collections_are_skipped(
        self, store: InMemoryCatalogStore
    ) -> None:
        result = await seed_catalog(store)

        assert result["products"] == 0
        assert await store.count(Predicate.match_all()) == 3
