"""API schemas for the Catalog API.

Pydantic models for request/response validation and serialization.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from catalog_api.catalog.models import Product, ProductBrand, ProductType


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Reference Schemas
# ============================================================================


class BrandSchema(BaseModel):
    """Brand reference."""

    id: str = Field(..., description="Brand ID")
    name: str = Field(..., description="Brand name")


class TypeSchema(BaseModel):
    """Product type reference."""

    id: str = Field(..., description="Product type ID")
    name: str = Field(..., description="Product type name")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(BaseModel):
    """Product representation."""

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Product description")
    summary: str = Field(default="", description="Short summary")
    image_file: str = Field(default="", description="Image path or URI")
    price: Decimal = Field(..., ge=0, description="Unit price, serialized as a decimal string")
    brand: BrandSchema
    type: TypeSchema


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(default="", description="Product description")
    summary: str = Field(default="", description="Short summary")
    image_file: str = Field(default="", description="Image path or URI")
    price: Decimal = Field(..., ge=0, description="Unit price")
    brand: BrandSchema
    type: TypeSchema


class ProductUpdateRequest(ProductCreateRequest):
    """Request to replace an existing product."""

    id: str = Field(..., description="ID of the product to replace")


class ProductPageResponse(BaseModel):
    """One page of catalog query results."""

    page_size: int = Field(..., description="Items per page")
    page_index: int = Field(..., description="Current page number (1-based)")
    count: int = Field(..., description="Total matching products")
    total_pages: int = Field(..., description="Number of pages for this count")
    has_more: bool = Field(..., description="Whether there are more pages")
    data: list[ProductResponse] = Field(default_factory=list)


class UpdateResultResponse(BaseModel):
    """Result of a product replacement."""

    updated: bool


class DeleteResultResponse(BaseModel):
    """Result of a product deletion."""

    deleted: bool


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert a Product document to its response schema."""
    return ProductResponse(
        id=product.id or "",
        name=product.name,
        description=product.description,
        summary=product.summary,
        image_file=product.image_file,
        price=product.price,
        brand=BrandSchema(id=product.brand.id, name=product.brand.name),
        type=TypeSchema(id=product.type.id, name=product.type.name),
    )


def request_to_product(
    request: ProductCreateRequest,
    product_id: str | None = None,
) -> Product:
    """Convert a create/update request to a Product document."""
    return Product(
        id=product_id,
        name=request.name,
        description=request.description,
        summary=request.summary,
        image_file=request.image_file,
        price=request.price,
        brand=ProductBrand(id=request.brand.id, name=request.brand.name),
        type=ProductType(id=request.type.id, name=request.type.name),
    )
