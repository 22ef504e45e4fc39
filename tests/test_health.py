"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from storefront.infrastructure.database import get_session
from storefront.main import app


@pytest.fixture
def session() -> MagicMock:
    """Create a mocked database session."""
    session = MagicMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def client(session: MagicMock) -> TestClient:
    """Create test client with the session dependency overridden."""

    async def override_session():
        yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_check_database_down(client: TestClient, session: MagicMock) -> None:
    """Test readiness endpoint reports an unreachable database."""
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
