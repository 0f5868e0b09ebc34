"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from moneycookie.core.rate_limit import limiter
from moneycookie.db.base import Base
from moneycookie.db.session import get_db
from moneycookie.models.instrument import Instrument
from moneycookie.models.instrument_price import InstrumentPrice

# Test database URL (SQLite in-memory for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(test_engine) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_limiter():
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield
    limiter.reset()


async def _add_instrument(
    db: AsyncSession,
    short_code: str,
    name: str,
    market: str | None,
    prices: list[tuple[date, str]],
) -> Instrument:
    instrument = Instrument(short_code=short_code, name=name, market=market)
    db.add(instrument)
    await db.flush()
    for price_date, price in prices:
        db.add(
            InstrumentPrice(
                instrument_id=instrument.id, price_date=price_date, price=Decimal(price)
            )
        )
    await db.commit()
    await db.refresh(instrument)
    return instrument


@pytest_asyncio.fixture(scope="function")
async def test_instrument(test_db: AsyncSession) -> Instrument:
    """Listed instrument whose latest price is 150.00."""
    return await _add_instrument(
        test_db,
        "005930",
        "Samsung Electronics",
        "KOSPI",
        [(date(2026, 10, 15), "140.00"), (date(2026, 10, 16), "150.00")],
    )


@pytest_asyncio.fixture(scope="function")
async def cheap_instrument(test_db: AsyncSession) -> Instrument:
    """Listed instrument whose latest price is 20.00."""
    return await _add_instrument(
        test_db,
        "035720",
        "Kakao",
        "KOSPI",
        [(date(2026, 10, 16), "20.00")],
    )


@pytest_asyncio.fixture(scope="function")
async def unpriced_instrument(test_db: AsyncSession) -> Instrument:
    """Listed instrument that has never had its prices synced."""
    return await _add_instrument(test_db, "293490", "Kakao Games", "KOSDAQ", [])


@pytest.fixture
def holding_payload(test_instrument: Instrument) -> dict[str, object]:
    """JSON body of a 10 x 100.00 holding in the 150.00 instrument."""
    return {
        "instrument_id": str(test_instrument.id),
        "quantity": 10,
        "buy_avg_price": "100.00",
        "buy_date": "2026-10-01",
    }
