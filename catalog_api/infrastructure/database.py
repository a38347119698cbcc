"""Document store configuration and client management.

Provides the async MongoDB client and the catalog store singleton.
"""

from pymongo import AsyncMongoClient

from catalog_api.catalog.repository import MongoCatalogStore
from catalog_api.catalog.store import CatalogStore, InMemoryCatalogStore
from catalog_api.infrastructure.config import settings

# Global instances
_client: AsyncMongoClient | None = None
_store: CatalogStore | None = None


def get_mongo_client() -> AsyncMongoClient:
    """Get MongoDB client singleton.

    The client connects lazily on first operation.
    """
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        )
    return _client


async def close_mongo_client() -> None:
    """Close the MongoDB client if one was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None


def create_catalog_store() -> CatalogStore:
    """Build the catalog store selected by ``settings.catalog_store``."""
    if settings.catalog_store == "memory":
        return InMemoryCatalogStore()

    return MongoCatalogStore(
        get_mongo_client()[settings.mongo_database],
        products_collection=settings.products_collection,
        brands_collection=settings.brands_collection,
        types_collection=settings.types_collection,
    )


def get_catalog_store() -> CatalogStore:
    """Get catalog store singleton."""
    global _store
    if _store is None:
        _store = create_catalog_store()
    return _store


def set_catalog_store(store: CatalogStore | None) -> None:
    """Replace the catalog store singleton (for testing)."""
    global _store
    _store = store
