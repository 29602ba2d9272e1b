"""Assemble the full analytics result for a current/previous window pair."""

from collections.abc import Iterable, Sequence

from portfolio_analytics.analytics.aggregation import aggregate_window
from portfolio_analytics.analytics.scoring import rank_properties
from portfolio_analytics.analytics.trends import trend_percent
from portfolio_analytics.schemas.analytics import (
    AnalyticsResult,
    PropertyRecord,
    ReservationRecord,
    TrendSet,
    WindowTotals,
)


def compute_trends(current: WindowTotals, previous: WindowTotals) -> TrendSet:
    """Percentage change of each headline metric."""
    return TrendSet(
        revenue=trend_percent(current.revenue, previous.revenue),
        occupancy_rate=trend_percent(current.occupancy_rate, previous.occupancy_rate),
        adr=trend_percent(current.adr, previous.adr),
        rev_pan=trend_percent(current.rev_pan, previous.rev_pan),
        avg_stay=trend_percent(current.avg_stay, previous.avg_stay),
        reservation_count=trend_percent(current.reservation_count, previous.reservation_count),
    )


def compute_analytics(
    reservations: Iterable[ReservationRecord],
    prev_reservations: Iterable[ReservationRecord],
    properties: Sequence[PropertyRecord],
    days_in_period: int,
    prev_days_in_period: int,
    pending_requests: int = 0,
) -> AnalyticsResult:
    """Compute portfolio analytics for a window and compare it to the previous one.

    Both reservation sets must already be scoped to their window; nothing
    here looks at dates beyond stay length.  The function is pure: the same
    arguments always produce an equal, immutable result.

    Args:
        reservations: Reservations of the current window (any status).
        prev_reservations: Reservations of the previous window (any status).
        properties: Properties in scope; each one is ranked, booked or not.
        days_in_period: Length of the current window in days.
        prev_days_in_period: Length of the previous window in days.
        pending_requests: Open service request count, passed through as-is.
    """
    current = aggregate_window(reservations, properties, days_in_period)
    previous = aggregate_window(prev_reservations, properties, prev_days_in_period)
    cur, prev = current.totals, previous.totals

    return AnalyticsResult(
        total_revenue=cur.revenue,
        prev_revenue=prev.revenue,
        total_nights=cur.total_nights,
        prev_total_nights=prev.total_nights,
        occupied_nights=cur.occupied_nights,
        prev_occupied_nights=prev.occupied_nights,
        occupancy_rate=cur.occupancy_rate,
        prev_occupancy_rate=prev.occupancy_rate,
        adr=cur.adr,
        prev_adr=prev.adr,
        rev_pan=cur.rev_pan,
        prev_rev_pan=prev.rev_pan,
        avg_stay=cur.avg_stay,
        prev_avg_stay=prev.avg_stay,
        reservation_count=cur.reservation_count,
        prev_reservation_count=prev.reservation_count,
        trends=compute_trends(cur, prev),
        property_count=len(current.by_property),
        pending_requests=pending_requests,
        by_property=rank_properties(current.by_property, cur.revenue, cur.avg_stay),
        by_channel=current.by_channel,
        vacant_nights=cur.vacant_nights,
        avg_revenue_per_booking=cur.avg_revenue_per_booking,
    )
