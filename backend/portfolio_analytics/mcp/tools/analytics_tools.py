"""Portfolio analytics MCP tool — revenue, occupancy, trends, and rankings."""

import logging
import uuid
from datetime import date

from portfolio_analytics.mcp import get_session_factory, mcp
from portfolio_analytics.schemas.analytics import Period
from portfolio_analytics.services.analytics_service import build_portfolio_analytics

logger = logging.getLogger(__name__)


@mcp.tool()
async def portfolio_performance(
    period: str = "month",
    as_of: str | None = None,
    property_ids: list[str] | None = None,
    top: int | None = None,
) -> dict:
    """Analyze portfolio performance against the previous period.

    Args:
        period: "month", "quarter", or "year"
        as_of: Reference date (YYYY-MM-DD, defaults to today)
        property_ids: Restrict the analysis to these property UUIDs
        top: Only return the N best-ranked properties (all by default)

    Returns:
        Dict with the current and previous windows and the analytics result
        (totals, trends, per-property ranking, per-channel breakdown).
    """
    valid_periods = {p.value for p in Period}
    if period not in valid_periods:
        return {"error": f"Invalid period '{period}'. Must be one of: {', '.join(sorted(valid_periods))}"}

    try:
        reference = date.fromisoformat(as_of) if as_of else None
        ids = [uuid.UUID(pid) for pid in property_ids] if property_ids else None
    except ValueError as e:
        return {"error": f"Invalid argument: {e}"}

    if top is not None and top < 1:
        return {"error": "top must be a positive integer."}

    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            result = await build_portfolio_analytics(
                session,
                period=period,
                now=reference,
                property_ids=ids,
            )
    except Exception as e:
        logger.exception("portfolio_performance failed")
        return {"error": str(e)}

    if ids and result.analytics.property_count == 0:
        return {"error": "No active properties found matching the filter."}

    payload = result.model_dump(mode="json", by_alias=True)
    if top is not None:
        payload["analytics"]["byProperty"] = payload["analytics"]["byProperty"][:top]
    return payload
