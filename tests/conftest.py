# tests/conftest.py
import os

# Must be set before pizza_pension.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")

import pytest
from httpx import AsyncClient
from httpx._transports.asgi import ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import AsyncMock, MagicMock

from pizza_pension.core.db import Base
from pizza_pension.core.db.session import get_db
from pizza_pension.main import app
from pizza_pension.api.v1.models import registration, session, user  # noqa: F401
from pizza_pension.api.v1.services.auth import AuthService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_USERNAME = "Oscar"
ADMIN_PASSWORD = "pizza-admin-123"


@pytest.fixture
async def async_session_maker():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    AsyncSessionMaker = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield AsyncSessionMaker
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_session_maker):
    async with async_session_maker() as session:
        yield session


@pytest.fixture
async def async_client(async_session_maker):
    """Client against the real app, backed by the in-memory database."""
    async def override_get_db():
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(db_session):
    return await AuthService(db_session).provision_user(ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
async def admin_client(async_client, admin_user):
    """async_client with an admin session cookie already set."""
    response = await async_client.post(
        "/api/v1/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return async_client


@pytest.fixture
def mock_db():
    """Mock AsyncSession for service-level tests."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    # add is not awaited in service code
    db.add = MagicMock()
    return db


def valid_submission(**overrides):
    data = {
        "firstName": "Anna",
        "lastName": "Berg",
        "email": "a@b.se",
        "pizza": "Hawaii",
        "drink": "Cola",
    }
    data.update(overrides)
    return data
