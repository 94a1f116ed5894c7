"""Shared fixtures for Catalog API tests.

Every test gets its own SQLite database file so state never leaks
between tests.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import Database
from catalog_api.infrastructure.security import create_access_token
from catalog_api.main import app


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    """SQLite database URL in a per-test directory."""
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    """Open database with all tables created."""
    database = Database(database_url)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session for service-level tests."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def service(session: AsyncSession) -> CatalogService:
    """Catalog service bound to the test session."""
    return CatalogService(session)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client(monkeypatch, database_url: str) -> Generator[TestClient, None, None]:
    """Create test client without authentication.

    Runs the application lifespan against a fresh database.
    """
    monkeypatch.setattr(settings, "database_url", database_url)
    monkeypatch.setattr(settings, "auto_create_tables", True)

    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get authentication headers with a valid access token."""
    token = create_access_token("test-user", "tester@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_client(client: TestClient, auth_headers: dict[str, str]) -> TestClient:
    """Create test client with valid bearer authentication."""
    client.headers.update(auth_headers)
    return client
