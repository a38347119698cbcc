"""Catalog document models.

Products embed their brand and type references, mirroring how they are
stored in the document store. All models are immutable: the query engine
only ever reads them.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductBrand(BaseModel):
    """Brand reference document.

    Attributes:
        id: Brand identifier.
        name: Brand display name.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ProductType(BaseModel):
    """Product type reference document.

    Attributes:
        id: Type identifier.
        name: Type display name.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Product(BaseModel):
    """Product document in the catalog.

    Attributes:
        id: Store-assigned identifier, None until the product is inserted.
        name: Product name, used for search and the default ordering.
        description: Long description.
        summary: Short summary.
        image_file: Image path or URI.
        price: Unit price, never negative.
        brand: Embedded brand reference.
        type: Embedded product type reference.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    description: str = ""
    summary: str = ""
    image_file: str = ""
    price: Decimal = Field(..., ge=0)
    brand: ProductBrand
    type: ProductType

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name}, price={self.price})>"
