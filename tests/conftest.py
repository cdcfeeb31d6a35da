"""
Pytest configuration and fixtures for the inventory API tests.
"""

import os

# settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_api.db.base import Base
from inventory_api.db.session import get_session
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.main import create_app
from inventory_api.models.category import Category
from inventory_api.models.product import Product


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def async_engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(db_session) -> UnitOfWork:
    return UnitOfWork(db_session)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def app(session_factory):
    application = create_app()

    async def _get_test_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_session] = _get_test_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_data() -> dict:
    return {"username": "alice", "email": "alice@example.com", "password": "s3cret-pass"}


@pytest_asyncio.fixture
async def auth_headers(client, user_data) -> dict:
    response = await client.post("/auth/register", json=user_data)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def make_category(uow):
    """Insert a category straight through the unit of work."""

    async def _make(name: str, description: str | None = None, is_active: bool = True) -> Category:
        category = Category(name=name, description=description, is_active=is_active)
        uow.add(category)
        await uow.commit()
        return category

    return _make


@pytest.fixture
def make_product(uow):
    async def _make(
        category: Category,
        name: str,
        price: str = "10.00",
        description: str | None = None,
        stock: int = 5,
        is_active: bool = True,
    ) -> Product:
        product = Product(
            name=name,
            description=description,
            price=Decimal(price),
            stock=stock,
            category_id=category.category_id,
            is_active=is_active,
        )
        uow.add(product)
        await uow.commit()
        return product

    return _make
