"""Test configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be set first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from support import RecordingObjectStore
from travel_admin.core.database import Base
from travel_admin.core.dependencies import get_db
from travel_admin.core.security import create_access_token
from travel_admin.models import *  # noqa: F403 - Import all models
from travel_admin.services.admin_service import AdminCredentialStore
from travel_admin.services.object_store import get_object_store

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def object_store():
    return RecordingObjectStore()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session, object_store):
    """The real application with the database and object store swapped out."""
    from travel_admin.main import create_app

    app = create_app()

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: object_store

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def admin(test_session):
    """The seeded admin account."""
    store = AdminCredentialStore(test_session)
    await store.ensure_seeded("admin", "s3cret")
    return await store.get_by_username("admin")


@pytest.fixture
def auth_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(str(admin.id))}"}


@pytest.fixture
def sample_package_data():
    """Sample package form values for testing."""
    return {
        "title": "Goa Beach Escape",
        "price": "15000",
        "days": "4",
        "shortDescription": "Sun, sand and seafood",
        "highlights": '["Baga beach", "Old Goa churches"]',
        "pricing": '{"adult": 15000, "child": 9000}',
    }
