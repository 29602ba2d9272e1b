"""Tests for the portfolio analytics MCP tool, called directly (not through MCP protocol).

The MCP session factory is overridden to return the same db_session used by
conftest fixtures, so the tool sees test data within the same transaction
(which rolls back after each test).
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_analytics.config import settings
from portfolio_analytics.mcp import mcp, set_session_factory
from portfolio_analytics.mcp.tools.analytics_tools import portfolio_performance

pytestmark = pytest.mark.asyncio


# ---------------------------------------------------------------------------
# MCP session factory setup — share the test db_session with MCP tools
# ---------------------------------------------------------------------------


class _TestSessionContext:
    """Async context manager that yields the shared test session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def __aenter__(self) -> AsyncSession:
        return self._session

    async def __aexit__(self, *args):
        # The conftest fixture owns the session lifecycle.
        pass


class _TestSessionFactory:
    """Callable that returns a context manager wrapping the shared session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def __call__(self) -> _TestSessionContext:
        return _TestSessionContext(self._session)


@pytest.fixture(autouse=True)
def setup_mcp_session(db_session: AsyncSession):
    """Override MCP session factory to share the test db_session."""
    set_session_factory(_TestSessionFactory(db_session))
    yield


# ---------------------------------------------------------------------------
# portfolio_performance
# ---------------------------------------------------------------------------


class TestPortfolioPerformance:
    async def test_month_summary(self, portfolio: dict, as_of: date) -> None:
        result = await portfolio_performance(period="month", as_of=as_of.isoformat())

        assert "error" not in result
        assert result["period"] == "month"
        assert result["currentWindow"]["startDate"] == "2026-03-01"
        assert result["previousWindow"]["endDate"] == "2026-02-28"

        analytics = result["analytics"]
        assert analytics["totalRevenue"] == 1450
        assert analytics["reservationCount"] == 3
        assert analytics["pendingRequests"] == 2
        assert [p["name"] for p in analytics["byProperty"]] == ["Villa Palm", "Villa Sunset"]

    async def test_top_limits_ranking(self, portfolio: dict, as_of: date) -> None:
        result = await portfolio_performance(as_of=as_of.isoformat(), top=1)

        analytics = result["analytics"]
        assert len(analytics["byProperty"]) == 1
        assert analytics["byProperty"][0]["name"] == "Villa Palm"
        # Totals still cover the whole portfolio.
        assert analytics["propertyCount"] == 2

    async def test_property_filter(self, portfolio: dict, as_of: date) -> None:
        result = await portfolio_performance(
            as_of=as_of.isoformat(),
            property_ids=[str(portfolio["palm"].id)],
        )

        analytics = result["analytics"]
        assert analytics["propertyCount"] == 1
        assert analytics["totalRevenue"] == 800
        assert analytics["pendingRequests"] == 0

    async def test_year_period(self, portfolio: dict, as_of: date) -> None:
        result = await portfolio_performance(period="year", as_of=as_of.isoformat())

        assert result["currentWindow"]["startDate"] == "2026-01-01"
        assert result["previousWindow"] == {
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "lengthInDays": 364,
        }
        # February and March stays both fall inside the year.
        assert result["analytics"]["totalRevenue"] == 1850

    async def test_invalid_period(self) -> None:
        result = await portfolio_performance(period="week")

        assert "error" in result
        assert "Invalid period" in result["error"]

    async def test_invalid_date(self) -> None:
        result = await portfolio_performance(as_of="20-03-2026")

        assert "error" in result
        assert "Invalid argument" in result["error"]

    async def test_invalid_property_id(self) -> None:
        result = await portfolio_performance(property_ids=["not-a-uuid"])

        assert "Invalid argument" in result["error"]

    async def test_top_must_be_positive(self) -> None:
        result = await portfolio_performance(top=0)

        assert result == {"error": "top must be a positive integer."}

    async def test_unknown_property(self, portfolio: dict) -> None:
        result = await portfolio_performance(property_ids=[str(uuid.uuid4())])

        assert result == {"error": "No active properties found matching the filter."}


class TestServerSettings:
    async def test_port_follows_settings(self) -> None:
        assert mcp.settings.port == settings.mcp_port
        assert f"localhost:{settings.mcp_port}" in mcp.settings.transport_security.allowed_hosts
