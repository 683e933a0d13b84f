"""
Pytest configuration and shared fixtures for the eWave marketplace test suite.

This module provides:
- Database fixtures (in-memory SQLite for fast tests, file SQLite for concurrency)
- FastAPI async client fixture with the session dependency overridden
- Catalog, user and review factories
"""

import os
from datetime import datetime
from typing import AsyncGenerator

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Keep the application engine off the developer database while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from ewave.core.db import Base, get_db
from ewave.main import app
from ewave.models import Review, Transaction, User, Vehicle


# Test Database Configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "testpass123"
# Low work factor keeps the suite fast; verification works for any cost
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(4)).decode("utf-8")

CATALOG = [
    dict(model_name="Tesla Model 3", make="Tesla", year=2023, price=38990.00, availability=3,
         tags="sedan,electric", description="Compact electric sedan."),
    dict(model_name="Tesla Roadster", make="Tesla", year=2024, price=200000.00, availability=0,
         tags="sports,electric", description="Sold out halo car."),
    dict(model_name="Honda Accord", make="Honda", year=2022, price=27295.00, availability=2,
         tags="sedan,gas", description="A practical alternative to a Tesla."),
    dict(model_name="Chevrolet Bolt", make="Chevrolet", year=2023, price=26500.00, availability=1,
         tags="hatchback,electric", description="Affordable city EV."),
    dict(model_name="Ford F-150 Lightning", make="Ford", year=2023, price=49995.00, availability=0,
         tags="truck,electric", description="Full-size electric pickup."),
    dict(model_name="Hyundai Ioniq 6", make="Hyundai", year=2024, price=42450.00, availability=0,
         tags="sedan,electric", description="Streamlined EV."),
]


@pytest_asyncio.fixture
async def async_engine():
    """Create async engine for testing with in-memory SQLite."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def async_db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for testing."""
    async_session = async_sessionmaker(async_engine, expire_on_commit=False)

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """
    File-backed SQLite engine where every session gets its own connection,
    so concurrent purchases contend on real store locks.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"timeout": 15},
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(async_db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client with database dependency override."""

    async def override_get_db():
        yield async_db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Test Data Factories
async def create_user(session: AsyncSession, username: str = "testuser") -> User:
    user = User(username=username, password=TEST_PASSWORD_HASH)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_vehicles(session: AsyncSession, rows=CATALOG) -> dict:
    vehicles = [Vehicle(**row) for row in rows]
    session.add_all(vehicles)
    await session.commit()
    for vehicle in vehicles:
        await session.refresh(vehicle)
    return {v.model_name: v for v in vehicles}


async def create_review(
    session: AsyncSession,
    user: User,
    vehicle: Vehicle,
    rating: int,
    text: str = "Nice ride",
    submitted: datetime = None
) -> Review:
    review = Review(user_id=user.user_id, vehicle_id=vehicle.vehicle_id, rating=rating, review_text=text)
    if submitted is not None:
        review.date_submitted = submitted
    session.add(review)
    await session.commit()
    await session.refresh(review)
    return review


async def create_transaction(session: AsyncSession, user: User, vehicle: Vehicle, code: str) -> Transaction:
    trx = Transaction(user_id=user.user_id, vehicle_id=vehicle.vehicle_id, confirmation_number=code)
    session.add(trx)
    await session.commit()
    await session.refresh(trx)
    return trx


@pytest_asyncio.fixture
async def test_user(async_db_session) -> User:
    """Create a test user."""
    return await create_user(async_db_session)


@pytest_asyncio.fixture
async def catalog(async_db_session) -> dict:
    """Seed the standard catalog, keyed by model name."""
    return await create_vehicles(async_db_session)
