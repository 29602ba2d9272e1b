"""Analytics API router — portfolio revenue, occupancy, and property rankings."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_analytics.api.deps import get_db
from portfolio_analytics.config import settings
from portfolio_analytics.schemas.analytics import Period, PortfolioAnalyticsResponse
from portfolio_analytics.services.analytics_service import build_portfolio_analytics

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/portfolio", response_model=PortfolioAnalyticsResponse)
async def get_portfolio_analytics(
    period: Period = Query(Period(settings.default_period), description="Reporting period"),
    as_of: date | None = Query(None, description="Reference date; defaults to today"),
    property_id: list[uuid.UUID] | None = Query(None, description="Restrict to these properties"),
    db: AsyncSession = Depends(get_db),
) -> PortfolioAnalyticsResponse:
    """Portfolio performance for the current period versus the previous one.

    The current window runs from the start of the month, quarter, or year up
    to ``as_of``; the previous window is the full period before it.  Totals,
    trends, a ranked per-property breakdown, and a per-channel breakdown are
    returned together.
    """
    result = await build_portfolio_analytics(
        db,
        period=period,
        now=as_of,
        property_ids=property_id,
    )

    if property_id and result.analytics.property_count == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )

    return result
