"""
Pytest configuration and fixtures.

Root-level fixtures shared across all test modules.
"""

import os

# Set test environment before the app reads its settings
os.environ["APP_ENV"] = "test"
os.environ["DEBUG"] = "false"
os.environ["AUTH_SECRET"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from rapideat.main import app  # noqa: E402
from rapideat.core.config import settings  # noqa: E402
from rapideat.core.database import get_db, get_optional_db  # noqa: E402
from rapideat.core.security import get_password_hash  # noqa: E402
from rapideat.models.user import User, UserRole  # noqa: E402
from rapideat.services.auth import SessionManager  # noqa: E402


# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# === Core Database Fixtures ===

@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for one test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def broken_db() -> AsyncGenerator[AsyncSession, None]:
    """Session whose database file can never be opened."""
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent-rapideat-dir/missing/app.db")
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_optional_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# === Auth Fixtures ===

@pytest.fixture
def manager(test_db: AsyncSession) -> SessionManager:
    """Session manager on the test database with the real clock."""
    return SessionManager(test_db)


@pytest.fixture
def cookie_name() -> str:
    return settings.auth_session_cookie


@pytest_asyncio.fixture
async def regular_user(test_db: AsyncSession) -> User:
    """Create regular user for tests."""
    user = User(
        name="Test User",
        email="user@example.com",
        password_hash=get_password_hash("testpassword"),
        role=UserRole.USER,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(test_db: AsyncSession) -> User:
    """Create admin user for tests."""
    user = User(
        name="Test Admin",
        email="admin@example.com",
        password_hash=get_password_hash("adminpassword"),
        role=UserRole.ADMIN,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user
