"""Catalog API endpoints.

Provides the paged product query plus product, brand and type lookups
and product writes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from catalog_api.api.schemas import (
    BrandSchema,
    DeleteResultResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductPageResponse,
    ProductResponse,
    ProductUpdateRequest,
    TypeSchema,
    UpdateResultResponse,
    product_to_response,
    request_to_product,
)
from catalog_api.catalog.query import QueryRequest
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.infrastructure.config import settings

router = APIRouter(prefix="/catalog", tags=["Catalog"])

STORE_ERROR_RESPONSES = {
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_service(request: Request) -> CatalogService:
    """Get catalog service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return get_catalog_service(request_id=request_id)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=ProductPageResponse,
    responses={400: {"model": ErrorResponse}, **STORE_ERROR_RESPONSES},
    summary="Query products",
    description=(
        "Get one page of products filtered by name search, brand and type, "
        "sorted by price (priceAsc, priceDesc) or by name (default)."
    ),
)
async def get_products(
    service: Annotated[CatalogService, Depends(get_service)],
    search: Annotated[str | None, Query(description="Name pattern")] = None,
    brand_id: Annotated[str | None, Query(description="Brand ID")] = None,
    type_id: Annotated[str | None, Query(description="Product type ID")] = None,
    sort: Annotated[str | None, Query(description="Sort token")] = None,
    page_size: Annotated[
        int, Query(ge=1, le=settings.catalog_max_page_size)
    ] = settings.catalog_default_page_size,
    page_index: Annotated[int, Query(ge=1)] = 1,
) -> ProductPageResponse:
    """Query a page of products.

    Args:
        service: Catalog service.
        search: Regular expression matched against product names.
        brand_id: Exact brand filter.
        type_id: Exact product type filter.
        sort: Sort token.
        page_size: Items per page.
        page_index: Page number (1-based).

    Returns:
        Page of products with total count.
    """
    page = await service.get_page(
        QueryRequest(
            search=search,
            brand_id=brand_id,
            type_id=type_id,
            sort=sort,
            page_size=page_size,
            page_index=page_index,
        )
    )

    return ProductPageResponse(
        page_size=page.page_size,
        page_index=page.page_index,
        count=page.count,
        total_pages=page.total_pages,
        has_more=page.has_next,
        data=[product_to_response(p) for p in page.data],
    )


@router.get(
    "/products/by-name/{name}",
    response_model=list[ProductResponse],
    summary="Get products by name",
)
async def get_products_by_name(
    name: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    """Get all products with exactly this name."""
    products = await service.get_products_by_name(name)
    return [product_to_response(p) for p in products]


@router.get(
    "/products/by-brand/{brand_name}",
    response_model=list[ProductResponse],
    summary="Get products by brand",
)
async def get_products_by_brand(
    brand_name: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    """Get all products of the brand with this name."""
    products = await service.get_products_by_brand(brand_name)
    return [product_to_response(p) for p in products]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Get a product by ID.

    Raises:
        ProductNotFoundError: If the product does not exist.
    """
    product = await service.get_product(product_id)
    return product_to_response(product)


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create product",
)
async def create_product(
    body: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Create a product. The store assigns its ID."""
    product = await service.create_product(request_to_product(body))
    return product_to_response(product)


@router.put(
    "/products",
    response_model=UpdateResultResponse,
    summary="Replace product",
)
async def update_product(
    body: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> UpdateResultResponse:
    """Replace an existing product.

    ``updated`` is False when no product has the ID or nothing changed.
    """
    updated = await service.update_product(request_to_product(body, body.id))
    return UpdateResultResponse(updated=updated)


@router.delete(
    "/products/{product_id}",
    response_model=DeleteResultResponse,
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> DeleteResultResponse:
    """Delete a product by ID."""
    deleted = await service.delete_product(product_id)
    return DeleteResultResponse(deleted=deleted)


@router.get(
    "/brands",
    response_model=list[BrandSchema],
    summary="List brands",
)
async def get_brands(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[BrandSchema]:
    """List all product brands."""
    brands = await service.get_all_brands()
    return [BrandSchema(id=b.id, name=b.name) for b in brands]


@router.get(
    "/types",
    response_model=list[TypeSchema],
    summary="List product types",
)
async def get_types(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[TypeSchema]:
    """List all product types."""
    types = await service.get_all_types()
    return [TypeSchema(id=t.id, name=t.name) for t in types]
