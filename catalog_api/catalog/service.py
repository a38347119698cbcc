"""Catalog service for product operations.

High-level service that combines the query engine with the store
capabilities for page queries and single-product operations.
"""

import asyncio

import structlog

from catalog_api.catalog.filters import build_predicate
from catalog_api.catalog.models import Product, ProductBrand, ProductType
from catalog_api.catalog.pagination import (
    CountScope,
    Page,
    assemble_page,
    compute_skip,
    count_matching,
    count_predicate,
    fetch_page,
)
from catalog_api.catalog.query import QueryRequest
from catalog_api.catalog.sorting import resolve_sort
from catalog_api.catalog.store import (
    BrandReader,
    ProductReader,
    ProductWriter,
    TypeReader,
)
from catalog_api.domain.exceptions import ProductNotFoundError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import get_catalog_store

logger = structlog.get_logger()


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = get_catalog_service()
        page = await service.get_page(
            QueryRequest(brand_id="B1", sort="priceAsc", page_size=10),
        )
    """

    def __init__(
        self,
        products: ProductReader,
        brands: BrandReader,
        types: TypeReader,
        writer: ProductWriter,
        count_scope: CountScope = CountScope.FILTERED,
        search_case_insensitive: bool = False,
        request_id: str | None = None,
    ) -> None:
        """Initialize service with store capabilities.

        Args:
            products: Product read capability.
            brands: Brand read capability.
            types: Product type read capability.
            writer: Product write capability.
            count_scope: Whether page counts honor the applied filter.
            search_case_insensitive: Whether name search ignores case.
            request_id: Request ID for log correlation.
        """
        self.products = products
        self.brands = brands
        self.types = types
        self.writer = writer
        self.count_scope = count_scope
        self.search_case_insensitive = search_case_insensitive
        self.request_id = request_id
        self._log = logger.bind(request_id=request_id) if request_id else logger

    async def get_page(self, request: QueryRequest) -> Page[Product]:
        """Run a catalog page query.

        The slice and the count are fetched concurrently. A query matching
        nothing returns an empty page, not an error.

        Args:
            request: Page query.

        Returns:
            Page of products.

        Raises:
            InvalidRequestError: If page parameters or the search pattern are invalid.
            StoreError: If either store operation fails.
        """
        request.validate()
        predicate = build_predicate(
            request, case_insensitive=self.search_case_insensitive
        )
        sort = resolve_sort(request.sort)

        data, count = await asyncio.gather(
            fetch_page(
                self.products,
                predicate,
                sort,
                request.page_size,
                request.page_index,
            ),
            count_matching(self.products, count_predicate(self.count_scope, predicate)),
        )

        self._log.debug(
            "Catalog page query",
            clauses=len(predicate.clauses),
            sort_field=sort.field,
            sort_direction=sort.direction.name,
            skip=compute_skip(request.page_size, request.page_index),
            limit=request.page_size,
            count_scope=self.count_scope.value,
            returned=len(data),
            count=count,
        )

        return assemble_page(request, data, count)

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID.

        Raises:
            ProductNotFoundError: If no product has this ID.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def get_products_by_name(self, name: str) -> list[Product]:
        """Get products with exactly this name."""
        return await self.products.find_by_name(name)

    async def get_products_by_brand(self, brand_name: str) -> list[Product]:
        """Get products of the brand with this name."""
        return await self.products.find_by_brand_name(brand_name)

    async def create_product(self, product: Product) -> Product:
        """Create a product.

        Args:
            product: Product to insert; an ID is assigned when missing.

        Returns:
            Inserted product with its ID.
        """
        created = await self.writer.insert(product)
        self._log.info("Product created", product_id=created.id)
        return created

    async def update_product(self, product: Product) -> bool:
        """Replace a product.

        Returns:
            True if an existing product was modified.
        """
        updated = await self.writer.replace(product)
        self._log.info("Product update", product_id=product.id, updated=updated)
        return updated

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product.

        Returns:
            True if a product was deleted.
        """
        deleted = await self.writer.delete(product_id)
        self._log.info("Product delete", product_id=product_id, deleted=deleted)
        return deleted

    async def get_all_brands(self) -> list[ProductBrand]:
        return await self.brands.list_brands()

    async def get_all_types(self) -> list[ProductType]:
        return await self.types.list_types()


# ============================================================================
# Service Factory
# ============================================================================


def get_catalog_service(request_id: str | None = None) -> CatalogService:
    """Get catalog service instance.

    Args:
        request_id: Request ID for correlation.

    Returns:
        CatalogService wired to the configured store.
    """
    store = get_catalog_store()
    return CatalogService(
        products=store,
        brands=store,
        types=store,
        writer=store,
        count_scope=CountScope(settings.catalog_count_scope),
        search_case_insensitive=settings.catalog_search_case_insensitive,
        request_id=request_id,
    )
