"""MongoDB catalog store.

Renders predicates and sort directives into MongoDB query documents and
translates driver errors into catalog store errors.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

import structlog
from bson import Decimal128, ObjectId
from pymongo import ASCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import (
    ConnectionFailure,
    DuplicateKeyError,
    ExecutionTimeout,
    NetworkTimeout,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
    WTimeoutError,
)

from catalog_api.catalog.filters import FilterClause, FilterOperator, Predicate
from catalog_api.catalog.models import Product, ProductBrand, ProductType
from catalog_api.catalog.sorting import SortDirective
from catalog_api.catalog.store import CatalogStore
from catalog_api.domain.exceptions import (
    InvalidSearchPatternError,
    ProductAlreadyExistsError,
    StoreError,
    StoreTimeoutError,
    StoreUnavailableError,
)

logger = structlog.get_logger()

ID_FIELD = "_id"

# Server error codes for a $regex that fails to compile
INVALID_REGEX_CODE = 51091
BAD_VALUE_CODE = 2


# ============================================================================
# Query Rendering
# ============================================================================


def _field_name(path: str) -> str:
    return ID_FIELD if path == "id" else path


def render_clause(clause: FilterClause) -> dict[str, Any]:
    """Render a filter clause as a MongoDB condition."""
    field = _field_name(clause.field)

    if clause.operator is FilterOperator.REGEX:
        condition: dict[str, Any] = {"$regex": clause.value}
        if clause.case_insensitive:
            condition["$options"] = "i"
        return {field: condition}

    return {field: clause.value}


def render_filter(predicate: Predicate) -> dict[str, Any]:
    """Render a predicate as a MongoDB filter document.

    The empty predicate renders as ``{}`` (match all).
    """
    conditions = [render_clause(clause) for clause in predicate.clauses]
    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


def id_filter(product_id: str) -> dict[str, Any]:
    """Render an identity lookup.

    Documents written by other clients may key on an ``ObjectId`` while this
    store writes string ids, so a valid ObjectId string matches both forms.
    """
    if ObjectId.is_valid(product_id):
        return {ID_FIELD: {"$in": [product_id, ObjectId(product_id)]}}
    return {ID_FIELD: product_id}


def render_sort(sort: SortDirective) -> list[tuple[str, int]]:
    """Render a sort directive, adding ``_id`` ascending as tie-breaker."""
    field = _field_name(sort.field)
    keys = [(field, int(sort.direction))]
    if field != ID_FIELD:
        keys.append((ID_FIELD, ASCENDING))
    return keys


# ============================================================================
# Document Mapping
# ============================================================================


def product_to_document(product: Product) -> dict[str, Any]:
    """Convert a product to a MongoDB document."""
    document = product.model_dump(exclude={"id"})
    document["price"] = Decimal128(product.price)
    document[ID_FIELD] = product.id
    return document


def document_to_product(document: dict[str, Any]) -> Product:
    """Convert a MongoDB document to a product."""
    data = dict(document)
    data["id"] = str(data.pop(ID_FIELD))
    price = data.get("price")
    if isinstance(price, Decimal128):
        data["price"] = price.to_decimal()
    elif price is not None:
        data["price"] = Decimal(str(price))
    return Product.model_validate(data)


def _reference_data(document: dict[str, Any]) -> dict[str, Any]:
    data = dict(document)
    data["id"] = str(data.pop(ID_FIELD))
    return data


# ============================================================================
# Error Translation
# ============================================================================


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate pymongo errors raised inside the block.

    Args:
        operation: Store operation name for error context.

    Raises:
        StoreTimeoutError: On server selection, network or execution timeouts.
        StoreUnavailableError: On other connection failures.
        StoreError: On any other driver error.
    """
    try:
        yield
    except (
        ServerSelectionTimeoutError,
        NetworkTimeout,
        ExecutionTimeout,
        WTimeoutError,
    ) as e:
        logger.warning("Store operation timed out", operation=operation, error=str(e))
        raise StoreTimeoutError(operation, str(e)) from e
    except ConnectionFailure as e:
        logger.warning("Store unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError(operation, str(e)) from e
    except PyMongoError as e:
        logger.warning("Store operation failed", operation=operation, error=str(e))
        raise StoreError(operation, str(e)) from e


def _is_regex_error(error: OperationFailure) -> bool:
    if error.code == INVALID_REGEX_CODE:
        return True
    return error.code == BAD_VALUE_CODE and "regular expression" in str(error).lower()


@contextmanager
def pattern_errors(predicate: Predicate) -> Iterator[None]:
    """Translate a server-side regex compile failure for ``predicate``.

    Raises:
        InvalidSearchPatternError: If the server rejects a REGEX clause.
    """
    try:
        yield
    except OperationFailure as e:
        patterns = [
            clause.value
            for clause in predicate.clauses
            if clause.operator is FilterOperator.REGEX
        ]
        if not patterns or not _is_regex_error(e):
            raise
        logger.info("Search pattern rejected", pattern=patterns[0], error=str(e))
        raise InvalidSearchPatternError(patterns[0], str(e)) from e


# ============================================================================
# Store
# ============================================================================


class MongoCatalogStore(CatalogStore):
    """Catalog store backed by MongoDB collections.

    Example usage:
        client = AsyncMongoClient(settings.mongo_url)
        store = MongoCatalogStore(client[settings.mongo_database])
        products = await store.find(predicate, DEFAULT_SORT, skip=0, limit=10)
    """

    def __init__(
        self,
        database: AsyncDatabase,
        products_collection: str = "Products",
        brands_collection: str = "Brands",
        types_collection: str = "Types",
    ) -> None:
        """Initialize store with a database handle.

        Args:
            database: Async MongoDB database.
            products_collection: Product collection name.
            brands_collection: Brand collection name.
            types_collection: Product type collection name.
        """
        self.database = database
        self.products: AsyncCollection = database[products_collection]
        self.brands: AsyncCollection = database[brands_collection]
        self.types: AsyncCollection = database[types_collection]

    async def find(
        self,
        predicate: Predicate,
        sort: SortDirective,
        skip: int,
        limit: int,
    ) -> list[Product]:
        with store_errors("find"), pattern_errors(predicate):
            cursor = (
                self.products.find(render_filter(predicate))
                .sort(render_sort(sort))
                .skip(skip)
                .limit(limit)
            )
            documents = await cursor.to_list()
        return [document_to_product(doc) for doc in documents]

    async def count(self, predicate: Predicate) -> int:
        with store_errors("count"), pattern_errors(predicate):
            return await self.products.count_documents(render_filter(predicate))

    async def get_by_id(self, product_id: str) -> Product | None:
        with store_errors("get_by_id"):
            document = await self.products.find_one(id_filter(product_id))
        return document_to_product(document) if document else None

    async def find_by_name(self, name: str) -> list[Product]:
        with store_errors("find_by_name"):
            documents = await self.products.find({"name": name}).to_list()
        return [document_to_product(doc) for doc in documents]

    async def find_by_brand_name(self, brand_name: str) -> list[Product]:
        with store_errors("find_by_brand_name"):
            documents = await self.products.find({"brand.name": brand_name}).to_list()
        return [document_to_product(doc) for doc in documents]

    async def list_brands(self) -> list[ProductBrand]:
        with store_errors("list_brands"):
            documents = await self.brands.find({}).to_list()
        return [ProductBrand.model_validate(_reference_data(doc)) for doc in documents]

    async def list_types(self) -> list[ProductType]:
        with store_errors("list_types"):
            documents = await self.types.find({}).to_list()
        return [ProductType.model_validate(_reference_data(doc)) for doc in documents]

    async def insert(self, product: Product) -> Product:
        if not product.id:
            product = product.model_copy(update={"id": str(ObjectId())})
        with store_errors("insert"):
            try:
                await self.products.insert_one(product_to_document(product))
            except DuplicateKeyError as e:
                raise ProductAlreadyExistsError(product.id) from e  # type: ignore[arg-type]
        return product

    async def replace(self, product: Product) -> bool:
        # The stored _id keeps its original BSON type
        document = product_to_document(product)
        del document[ID_FIELD]
        with store_errors("replace"):
            result = await self.products.replace_one(
                id_filter(product.id or ""),
                document,
            )
        return result.acknowledged and result.modified_count > 0

    async def delete(self, product_id: str) -> bool:
        with store_errors("delete"):
            result = await self.products.delete_one(id_filter(product_id))
        return result.acknowledged and result.deleted_count > 0

    async def insert_brands(self, brands: list[ProductBrand]) -> None:
        with store_errors("insert_brands"):
            await self.brands.insert_many(
                [{ID_FIELD: b.id, "name": b.name} for b in brands]
            )

    async def insert_types(self, types: list[ProductType]) -> None:
        with store_errors("insert_types"):
            await self.types.insert_many(
                [{ID_FIELD: t.id, "name": t.name} for t in types]
            )

    async def ping(self) -> bool:
        with store_errors("ping"):
            await self.database.command("ping")
        return True
