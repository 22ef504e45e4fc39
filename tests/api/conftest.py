"""Shared fixtures for API tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api.products import get_catalog_service
from storefront.catalog.sampler import RandomSampler
from storefront.infrastructure.database import get_session
from storefront.main import app


class StubCatalogService:
    """Catalog service reading from the in-memory store."""

    def __init__(self, store) -> None:
        self.store = store

    async def random_products(self, count=None):
        return await RandomSampler(self.store).sample(count)


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a session whose queries succeed."""
    session = MagicMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def client(store, mock_session) -> Generator[TestClient, None, None]:
    """Create test client backed by the in-memory store."""

    async def override_session():
        yield mock_session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_catalog_service] = lambda: StubCatalogService(store)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
