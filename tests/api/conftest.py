"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from catalog_api.catalog.store import InMemoryCatalogStore
from catalog_api.infrastructure.database import set_catalog_store
from catalog_api.main import app


@pytest.fixture(autouse=True)
def use_store(store: InMemoryCatalogStore) -> Iterator[InMemoryCatalogStore]:
    """Serve requests from the in-memory fruit store."""
    set_catalog_store(store)
    yield store
    set_catalog_store(None)


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)
