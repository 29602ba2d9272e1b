"""Fold one window's reservations into portfolio, property, and channel metrics."""

import uuid
from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal

from portfolio_analytics.analytics.stays import is_counted, reservation_nights
from portfolio_analytics.schemas.analytics import (
    ZERO,
    ChannelMetrics,
    PropertyMetrics,
    PropertyRecord,
    ReservationRecord,
    WindowAggregate,
    WindowTotals,
)

DEFAULT_CHANNEL = "Direct"

CHANNEL_COLORS: dict[str, str] = {
    "Airbnb": "#FF5A5F",
    "Booking.com": "#003580",
    "Booking": "#003580",
    "Direct": "#059669",
    "VRBO": "#3B5998",
    "Expedia": "#FBCE00",
}
DEFAULT_CHANNEL_COLOR = "#6B7280"


def channel_key(reservation: ReservationRecord) -> str:
    """Channel a reservation is attributed to, with surrounding whitespace trimmed.

    Unlabeled bookings are direct.
    """
    for label in (reservation.source_name, reservation.source):
        if label and label.strip():
            return label.strip()
    return DEFAULT_CHANNEL


def _ratio(numerator: Decimal | int, denominator: Decimal | int) -> Decimal:
    if denominator <= 0:
        return ZERO
    return Decimal(numerator) / Decimal(denominator)


def _unique_properties(properties: Iterable[PropertyRecord]) -> list[PropertyRecord]:
    seen: set[uuid.UUID] = set()
    unique: list[PropertyRecord] = []
    for prop in properties:
        if prop.id not in seen:
            seen.add(prop.id)
            unique.append(prop)
    return unique


def _property_metrics(
    prop: PropertyRecord,
    stays: list[tuple[ReservationRecord, int]],
    window_length: int,
) -> PropertyMetrics:
    """Metrics for one property; its denominator is the window, not the portfolio."""
    revenue = sum((r.total_price for r, _ in stays), ZERO)
    occupied = sum(nights for _, nights in stays)
    return PropertyMetrics(
        id=prop.id,
        name=prop.name,
        revenue=revenue,
        occupied_nights=occupied,
        total_nights=window_length,
        occupancy_rate=_ratio(occupied, window_length) * 100,
        reservation_count=len(stays),
        avg_stay=_ratio(occupied, len(stays)),
    )


def _channel_breakdown(stays: list[tuple[ReservationRecord, int]]) -> tuple[ChannelMetrics, ...]:
    revenue_by_channel: dict[str, Decimal] = defaultdict(lambda: ZERO)
    count_by_channel: dict[str, int] = defaultdict(int)
    for reservation, _ in stays:
        key = channel_key(reservation)
        revenue_by_channel[key] += reservation.total_price
        count_by_channel[key] += 1

    channels = [
        ChannelMetrics(
            name=name,
            revenue=revenue,
            count=count_by_channel[name],
            color=CHANNEL_COLORS.get(name, DEFAULT_CHANNEL_COLOR),
        )
        for name, revenue in revenue_by_channel.items()
    ]
    channels.sort(key=lambda c: (-c.revenue, c.name))
    return tuple(channels)


def aggregate_window(
    reservations: Iterable[ReservationRecord],
    properties: Sequence[PropertyRecord],
    window_length: int,
) -> WindowAggregate:
    """Compute portfolio totals plus per-property and per-channel breakdowns.

    Cancelled and no-show reservations are dropped here, so callers may pass
    the raw provider output.  Every property appears in the breakdown even
    without reservations.  Availability is modelled as every property being
    open every day of the window; occupancy is therefore not capped and can
    exceed 100 when the source data contains overlapping stays.  Per-property
    scores are left at 0 for the scorer to fill in.
    """
    window_length = max(0, window_length)
    unique_properties = _unique_properties(properties)

    stays = [(r, reservation_nights(r)) for r in reservations if is_counted(r)]

    revenue = sum((r.total_price for r, _ in stays), ZERO)
    occupied_nights = sum(nights for _, nights in stays)
    total_nights = len(unique_properties) * window_length

    totals = WindowTotals(
        revenue=revenue,
        occupied_nights=occupied_nights,
        total_nights=total_nights,
        occupancy_rate=_ratio(occupied_nights, total_nights) * 100,
        adr=_ratio(revenue, occupied_nights),
        rev_pan=_ratio(revenue, total_nights),
        avg_stay=_ratio(occupied_nights, len(stays)),
        reservation_count=len(stays),
        avg_revenue_per_booking=_ratio(revenue, len(stays)),
        vacant_nights=max(0, total_nights - occupied_nights),
    )

    stays_by_property: dict[uuid.UUID, list[tuple[ReservationRecord, int]]] = defaultdict(list)
    for reservation, nights in stays:
        stays_by_property[reservation.property_id].append((reservation, nights))

    by_property = tuple(
        _property_metrics(prop, stays_by_property.get(prop.id, []), window_length)
        for prop in unique_properties
    )

    return WindowAggregate(
        totals=totals,
        by_property=by_property,
        by_channel=_channel_breakdown(stays),
    )
