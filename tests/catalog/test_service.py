"""Tests for CatalogService page queries and product operations."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from catalog_api.catalog.filters import Predicate
from catalog_api.catalog.models import Product
from catalog_api.catalog.pagination import CountScope, Page
from catalog_api.catalog.query import QueryRequest
from catalog_api.catalog.service import CatalogService
from catalog_api.catalog.store import InMemoryCatalogStore
from catalog_api.domain.exceptions import (
    InvalidPageRequestError,
    InvalidSearchPatternError,
    ProductNotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from tests.factories import BRAND_ONE, TYPE_ONE, make_product


def _names(page: Page[Product]) -> list[str]:
    return [p.name for p in page.data]


class TestScenarios:
    """Page queries over Apple(10), Banana(5), Cherry(20)."""

    @pytest.mark.asyncio
    async def test_price_ascending_first_page(self, service: CatalogService) -> None:
        """priceAsc, size 2, page 1 -> Banana, Apple."""
        page = await service.get_page(
            QueryRequest(sort="priceAsc", page_size=2, page_index=1)
        )

        assert _names(page) == ["Banana", "Apple"]
        assert [p.price for p in page.data] == [5, 10]
        assert page.page_size == 2
        assert page.page_index == 1

    @pytest.mark.asyncio
    async def test_price_descending_second_page(self, service: CatalogService) -> None:
        """priceDesc, size 2, page 2 skips two -> Banana."""
        page = await service.get_page(
            QueryRequest(sort="priceDesc", page_size=2, page_index=2)
        )

        assert _names(page) == ["Banana"]
        assert page.page_index == 2

    @pytest.mark.asyncio
    async def test_brand_filter_filtered_count(self, service: CatalogService) -> None:
        """Brand B1 matches one product; the filtered count agrees with the data."""
        page = await service.get_page(QueryRequest(brand_id="B1", page_size=10))

        assert _names(page) == ["Apple"]
        assert page.count == 1
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_brand_filter_legacy_count(self, legacy_service: CatalogService) -> None:
        """Under the ALL scope, data is filtered but the count is the whole collection.

        The data slice never depends on the count scope; only ``count``
        changes between the two scopes.
        """
        page = await legacy_service.get_page(QueryRequest(brand_id="B1", page_size=10))

        assert _names(page) == ["Apple"]
        assert page.count == 3

    @pytest.mark.asyncio
    async def test_default_sort_is_name(self) -> None:
        """No sort token orders by name ascending."""
        store = InMemoryCatalogStore(
            products=[
                make_product("Banana", 5),
                make_product("Apple", 10),
                make_product("Cherry", 20),
            ]
        )
        service = CatalogService(store, store, store, store)

        page = await service.get_page(QueryRequest(page_size=10))

        assert _names(page) == ["Apple", "Banana", "Cherry"]

    @pytest.mark.asyncio
    async def test_unknown_sort_token_uses_default(self, service: CatalogService) -> None:
        page = await service.get_page(QueryRequest(sort="ratingDesc", page_size=10))
        assert _names(page) == ["Apple", "Banana", "Cherry"]

    @pytest.mark.asyncio
    async def test_repeated_query_is_identical(self, service: CatalogService) -> None:
        """Same request against an unmodified store yields an equal page."""
        request = QueryRequest(search="e", sort="priceDesc", page_size=1, page_index=2)

        first = await service.get_page(request)
        second = await service.get_page(request)

        assert first == second

    @pytest.mark.asyncio
    async def test_search_brand_and_type_combined(self, service: CatalogService) -> None:
        page = await service.get_page(
            QueryRequest(search="e", brand_id="B2", type_id="T2", page_size=10)
        )
        assert _names(page) == ["Cherry"]
        assert page.count == 1


class TestEmptyResults:
    """No matches is a normal outcome."""

    @pytest.mark.asyncio
    async def test_no_match_returns_empty_page(self, service: CatalogService) -> None:
        page = await service.get_page(QueryRequest(brand_id="missing", page_size=5))

        assert page.data == []
        assert page.count == 0
        assert page.total_pages == 0

    @pytest.mark.asyncio
    async def test_empty_collection(self) -> None:
        store = InMemoryCatalogStore()
        service = CatalogService(store, store, store, store, count_scope=CountScope.ALL)

        page = await service.get_page(QueryRequest())

        assert page == Page(page_size=10, page_index=1, data=[], count=0)


class TestValidation:
    """Invalid requests fail before any store I/O."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("page_size", "page_index"), [(0, 1), (2, 0)])
    async def test_invalid_page_parameters(
        self, page_size: int, page_index: int
    ) -> None:
        store = AsyncMock(spec=InMemoryCatalogStore)
        service = CatalogService(store, store, store, store)

        with pytest.raises(InvalidPageRequestError):
            await service.get_page(
                QueryRequest(page_size=page_size, page_index=page_index)
            )

        store.find.assert_not_awaited()
        store.count.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_search_pattern(self, service: CatalogService) -> None:
        with pytest.raises(InvalidSearchPatternError):
            await service.get_page(QueryRequest(search="[a-"))

    @pytest.mark.asyncio
    async def test_case_insensitive_service(self, store: InMemoryCatalogStore) -> None:
        service = CatalogService(
            store, store, store, store, search_case_insensitive=True
        )
        page = await service.get_page(QueryRequest(search="cherry"))
        assert _names(page) == ["Cherry"]


class TestStoreFailures:
    """Store errors propagate unchanged; no partial pages."""

    @pytest.mark.asyncio
    async def test_find_failure_propagates(self, store: InMemoryCatalogStore) -> None:
        store.find = AsyncMock(side_effect=StoreUnavailableError("find", "down"))  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store)

        with pytest.raises(StoreUnavailableError):
            await service.get_page(QueryRequest())

    @pytest.mark.asyncio
    async def test_count_failure_propagates(self, store: InMemoryCatalogStore) -> None:
        store.count = AsyncMock(side_effect=StoreTimeoutError("count", "slow"))  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store)

        with pytest.raises(StoreTimeoutError):
            await service.get_page(QueryRequest())

    @pytest.mark.asyncio
    async def test_filtered_count_receives_predicate(
        self, store: InMemoryCatalogStore
    ) -> None:
        store.count = AsyncMock(return_value=1)  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store)

        await service.get_page(QueryRequest(type_id="T2"))

        predicate = store.count.await_args.args[0]
        assert not predicate.is_empty

    @pytest.mark.asyncio
    async def test_legacy_count_receives_match_all(
        self, store: InMemoryCatalogStore
    ) -> None:
        store.count = AsyncMock(return_value=3)  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store, count_scope=CountScope.ALL)

        await service.get_page(QueryRequest(type_id="T2"))

        store.count.assert_awaited_once_with(Predicate.match_all())


class TestConcurrency:
    """Slice and count run concurrently."""

    @pytest.mark.asyncio
    async def test_find_and_count_overlap(self, store: InMemoryCatalogStore) -> None:
        started: list[str] = []
        both_started = asyncio.Event()
        original_find = store.find
        original_count = store.count

        async def mark(name: str) -> None:
            started.append(name)
            if len(started) == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)

        async def slow_find(*args, **kwargs):
            await mark("find")
            return await original_find(*args, **kwargs)

        async def slow_count(*args, **kwargs):
            await mark("count")
            return await original_count(*args, **kwargs)

        store.find = slow_find  # type: ignore[method-assign]
        store.count = slow_count  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store)

        page = await service.get_page(QueryRequest(page_size=2))

        assert sorted(started) == ["count", "find"]
        assert len(page.data) == 2
        assert page.count == 3

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, store: InMemoryCatalogStore) -> None:
        blocked = asyncio.Event()

        async def never_finishes(*args, **kwargs):
            blocked.set()
            await asyncio.Event().wait()

        store.find = never_finishes  # type: ignore[method-assign]
        service = CatalogService(store, store, store, store)

        task = asyncio.create_task(service.get_page(QueryRequest()))
        await blocked.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestProductOperations:
    """Tests for single-product operations."""

    @pytest.mark.asyncio
    async def test_get_product(self, service: CatalogService) -> None:
        product = await service.get_product("p-apple")
        assert product.name == "Apple"

    @pytest.mark.asyncio
    async def test_get_product_not_found(self, service: CatalogService) -> None:
        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.get_product("missing")
        assert exc_info.value.details == {"product_id": "missing"}

    @pytest.mark.asyncio
    async def test_get_products_by_name_and_brand(self, service: CatalogService) -> None:
        assert [p.id for p in await service.get_products_by_name("Cherry")] == ["p-cherry"]
        assert [p.id for p in await service.get_products_by_brand("Orchard")] == ["p-apple"]

    @pytest.mark.asyncio
    async def test_create_update_delete(self, service: CatalogService) -> None:
        created = await service.create_product(make_product("Date", 8, BRAND_ONE, TYPE_ONE))
        assert created.id

        renamed = created.model_copy(update={"name": "Dried Date"})
        assert await service.update_product(renamed) is True
        assert (await service.get_product(created.id)).name == "Dried Date"

        assert await service.delete_product(created.id) is True
        with pytest.raises(ProductNotFoundError):
            await service.get_product(created.id)

    @pytest.mark.asyncio
    async def test_brands_and_types(self, service: CatalogService) -> None:
        assert [b.name for b in await service.get_all_brands()] == ["Orchard", "Grove"]
        assert [t.name for t in await service.get_all_types()] == ["Pome", "Drupe"]
