"""Shared test fixtures for SalonBook API tests.

Uses an in-memory SQLite async engine so tests run without PostgreSQL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SHOP_TIMEZONE", "America/Los_Angeles")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from salonbook.core.config import settings
from salonbook.core.database import Base, get_db
from salonbook.main import app

# Import all models to ensure they're registered with Base.metadata
from salonbook.models.appointment import Appointment  # noqa: F401
from salonbook.models.nail_tech import NailTech  # noqa: F401
from salonbook.models.service import Service, DesignMode
from salonbook.models.user import User


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_EXTERNAL_ID = "user_test_123"


def make_token(subject: str = TEST_EXTERNAL_ID, **claims) -> str:
    """Mint a token the way the identity provider would."""
    return jwt.encode({"sub": subject, **claims}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    """Direct DB session for test setup/assertions."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """Async HTTP test client (unauthenticated)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def user(db):
    user = User(external_id=TEST_EXTERNAL_ID, email="owner@example.com", name="Owner")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def auth_client(client, user):
    """Client carrying a valid bearer token for ``user``."""
    client.headers["Authorization"] = f"Bearer {make_token()}"
    return client


@pytest_asyncio.fixture
async def gel_manicure(db):
    """$45 service with a fixed $10 design add-on."""
    service = Service(
        name="Gel Manicure",
        price_cents=4500,
        duration_min=60,
        design_mode=DesignMode.FIXED,
        design_price_cents=1000,
    )
    db.add(service)
    await db.commit()
    return service


@pytest_asyncio.fixture
async def plain_pedicure(db):
    """$50 service without design add-ons."""
    service = Service(name="Classic Pedicure", price_cents=5000, duration_min=60)
    db.add(service)
    await db.commit()
    return service
