"""Shared test configuration and fixtures.

Each test gets a fresh database (in-memory SQLite through aiosqlite unless
``TEST_DATABASE_URL`` points somewhere else) with all tables created, and a
session wrapped in a transaction that always rolls back.
"""

import os
import uuid
from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from portfolio_analytics.database import Base, get_db
from portfolio_analytics.main import app
from portfolio_analytics.models.property import Property
from portfolio_analytics.models.reservation import Reservation
from portfolio_analytics.models.service_request import ServiceRequest

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# Reference date used by the database-backed tests:
# month window 2026-03-01..2026-03-20 (19 days),
# previous window 2026-02-01..2026-02-28 (27 days).
AS_OF = date(2026, 3, 20)


def _make_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so the in-memory database survives across sessions.
        return create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    return create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Per-test: fresh schema + transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an engine with all tables; drop them afterwards."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: a small portfolio inserted directly via the ORM
# ---------------------------------------------------------------------------


def _reservation(prop: Property, check_in: date | None, check_out: date | None, price: str, **kwargs) -> Reservation:
    return Reservation(
        property_id=prop.id,
        guest_name=kwargs.pop("guest_name", f"Guest {uuid.uuid4().hex[:6]}"),
        check_in=check_in,
        check_out=check_out,
        total_price=Decimal(price),
        status=kwargs.pop("status", "confirmed"),
        **kwargs,
    )


@pytest_asyncio.fixture
async def portfolio(db_session: AsyncSession) -> dict:
    """Two active villas, one inactive villa, reservations in both windows.

    Current window (March 1–20):
      - Villa Sunset: 2 nights / 200 via Airbnb, 3 nights / 450 direct
      - Villa Palm:   5 nights / 800 via Booking.com, cancelled 4 nights / 999
    Previous window (February):
      - Villa Sunset: 4 nights / 400 via Airbnb
      - Villa Palm:   no-show 2 nights / 300
    Villa Closed (inactive) carries a reservation that must never show up.
    Open service requests: 2 pending on Sunset, 1 done on Palm.
    """
    sunset = Property(name="Villa Sunset", location="Seminyak", status="active", nightly_price=Decimal("100.00"))
    palm = Property(name="Villa Palm", location="Ubud", status="active", nightly_price=Decimal("160.00"))
    closed = Property(name="Villa Closed", location="Canggu", status="inactive")
    db_session.add_all([sunset, palm, closed])
    await db_session.flush()

    db_session.add_all(
        [
            _reservation(sunset, date(2026, 3, 2), date(2026, 3, 4), "200.00", source="airbnb", source_name="Airbnb"),
            _reservation(sunset, date(2026, 3, 10), date(2026, 3, 13), "450.00"),
            _reservation(palm, date(2026, 3, 5), date(2026, 3, 10), "800.00", source_name="Booking.com"),
            _reservation(palm, date(2026, 3, 14), date(2026, 3, 18), "999.00", status="CANCELLED"),
            _reservation(sunset, date(2026, 2, 10), date(2026, 2, 14), "400.00", source_name="Airbnb"),
            _reservation(palm, date(2026, 2, 20), date(2026, 2, 22), "300.00", status="no_show"),
            _reservation(closed, date(2026, 3, 3), date(2026, 3, 8), "5000.00"),
            ServiceRequest(property_id=sunset.id, title="Pool cleaning", status="pending"),
            ServiceRequest(property_id=sunset.id, title="Replace AC filter", status="pending"),
            ServiceRequest(property_id=palm.id, title="Garden trim", status="done"),
        ]
    )
    await db_session.flush()

    return {"sunset": sunset, "palm": palm, "closed": closed}


@pytest.fixture
def as_of() -> date:
    """Reference date matching the ``portfolio`` fixture's windows."""
    return AS_OF
