"""Analytics service — loads portfolio data and runs the analytics engine."""

import logging
import uuid
from collections.abc import Sequence
from datetime import date, datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_analytics.analytics import compute_analytics, resolve_period_windows
from portfolio_analytics.config import settings
from portfolio_analytics.models.property import Property
from portfolio_analytics.models.reservation import Reservation
from portfolio_analytics.models.service_request import ServiceRequest
from portfolio_analytics.schemas.analytics import (
    Period,
    PortfolioAnalyticsResponse,
    PropertyRecord,
    ReservationRecord,
)

logger = logging.getLogger(__name__)

OPEN_REQUEST_STATUSES = ("pending",)


def reporting_today() -> date:
    """Today's date in the configured reporting timezone."""
    return datetime.now(settings.timezone).date()


async def fetch_active_properties(
    db: AsyncSession,
    property_ids: Sequence[uuid.UUID] | None = None,
) -> list[PropertyRecord]:
    """Active properties, optionally narrowed to ``property_ids``, ordered by name."""
    query = select(Property).where(Property.status == "active")
    if property_ids:
        query = query.where(Property.id.in_(property_ids))
    query = query.order_by(Property.name, Property.id)

    result = await db.execute(query)
    return [PropertyRecord.model_validate(p) for p in result.scalars().all()]


async def fetch_reservations(
    db: AsyncSession,
    property_ids: Sequence[uuid.UUID],
    start_date: date,
    end_date: date,
    limit: int | None = None,
) -> list[ReservationRecord]:
    """Reservations of the given properties overlapping ``[start_date, end_date]``.

    A reservation without a check-out date is kept when it checks in within
    the range.  Every status is returned; the engine decides what counts.
    Results are capped at ``limit`` (default ``settings.reservation_fetch_limit``), oldest
    check-in first.
    """
    if not property_ids:
        return []

    query = (
        select(Reservation)
        .where(
            Reservation.property_id.in_(property_ids),
            Reservation.check_in <= end_date,
            or_(Reservation.check_out >= start_date, Reservation.check_out.is_(None)),
        )
        .order_by(Reservation.check_in, Reservation.id)
        .limit(limit or settings.reservation_fetch_limit)
    )
    result = await db.execute(query)
    return [ReservationRecord.model_validate(r) for r in result.scalars().all()]


async def count_pending_requests(
    db: AsyncSession,
    property_ids: Sequence[uuid.UUID],
) -> int:
    """Number of open service requests across the given properties."""
    if not property_ids:
        return 0

    result = await db.execute(
        select(func.count())
        .select_from(ServiceRequest)
        .where(
            ServiceRequest.property_id.in_(property_ids),
            ServiceRequest.status.in_(OPEN_REQUEST_STATUSES),
        )
    )
    return result.scalar_one()


async def build_portfolio_analytics(
    db: AsyncSession,
    period: Period | str = Period.MONTH,
    now: date | datetime | None = None,
    property_ids: Sequence[uuid.UUID] | None = None,
) -> PortfolioAnalyticsResponse:
    """Fetch everything the engine needs for ``period`` and compute the result.

    ``now`` defaults to today in the reporting timezone.  Queries run one
    after another on the same session.
    """
    period = Period(period)
    windows = resolve_period_windows(period, now if now is not None else reporting_today())
    current, previous = windows.current_window, windows.previous_window
    logger.debug(
        "Resolved %s windows: current %s..%s (%d days), previous %s..%s (%d days)",
        period.value,
        current.start_date,
        current.end_date,
        current.length_in_days,
        previous.start_date,
        previous.end_date,
        previous.length_in_days,
    )

    properties = await fetch_active_properties(db, property_ids)
    ids = [p.id for p in properties]

    reservations = await fetch_reservations(db, ids, current.start_date, current.end_date)
    prev_reservations = await fetch_reservations(db, ids, previous.start_date, previous.end_date)
    pending_requests = await count_pending_requests(db, ids)

    for label, fetched in (("current", reservations), ("previous", prev_reservations)):
        if len(fetched) >= settings.reservation_fetch_limit:
            logger.warning(
                "Reservation fetch for the %s window hit the limit of %d; metrics may be understated",
                label,
                settings.reservation_fetch_limit,
            )

    analytics = compute_analytics(
        reservations,
        prev_reservations,
        properties,
        current.length_in_days,
        previous.length_in_days,
        pending_requests,
    )
    logger.info(
        "Computed %s analytics for %d properties (%d current / %d previous reservations)",
        period.value,
        len(properties),
        len(reservations),
        len(prev_reservations),
    )

    return PortfolioAnalyticsResponse(
        period=period,
        current_window=current,
        previous_window=previous,
        analytics=analytics,
    )
