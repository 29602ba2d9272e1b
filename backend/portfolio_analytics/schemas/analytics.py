"""Pydantic v2 schemas for the portfolio analytics engine and its endpoints.

Attributes are snake_case in Python and camelCase on the wire; the rendering
layer depends on the camelCase names (``totalRevenue``, ``byProperty``,
``revPAN`` ...), so do not rename aliases casually.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Amounts and rates are exact Decimals in Python, plain numbers in JSON.
Number = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

ZERO = Decimal("0")


class Period(str, Enum):
    """Coarse reporting period selector."""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class AnalyticsModel(BaseModel):
    """Immutable base for everything the engine produces."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ReservationRecord(AnalyticsModel):
    """Read-only view of a reservation as the engine sees it."""

    model_config = ConfigDict(from_attributes=True)

    property_id: uuid.UUID
    check_in: date | None = None
    check_out: date | None = None
    total_price: Number = ZERO
    status: str | None = None
    source: str | None = None
    source_name: str | None = None

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        """Drop the time-of-day part; stays are counted in calendar nights."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("total_price", mode="before")
    @classmethod
    def _missing_price_is_zero(cls, value: Any) -> Any:
        return ZERO if value is None else value


class PropertyRecord(AnalyticsModel):
    """Identity of a property in scope; other attributes are irrelevant here."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------


class PeriodWindow(AnalyticsModel):
    """Inclusive calendar date range."""

    start_date: date
    end_date: date
    length_in_days: int = Field(ge=0)

    @classmethod
    def between(cls, start_date: date, end_date: date) -> "PeriodWindow":
        """Build a window, clamping an inverted range to zero length."""
        return cls(
            start_date=start_date,
            end_date=end_date,
            length_in_days=max(0, (end_date - start_date).days),
        )


class PeriodWindows(AnalyticsModel):
    """A reporting window and the equal-cadence window right before it."""

    current_window: PeriodWindow
    previous_window: PeriodWindow


class PropertyMetrics(AnalyticsModel):
    """Per-property performance over one window."""

    id: uuid.UUID
    name: str
    revenue: Number
    occupied_nights: int
    total_nights: int
    occupancy_rate: Number  # percentage, not clamped to 100
    reservation_count: int
    avg_stay: Number
    score: int = 0


class ChannelMetrics(AnalyticsModel):
    """Revenue and booking count attributed to one sales channel."""

    name: str
    revenue: Number
    count: int
    color: str


class WindowTotals(AnalyticsModel):
    """Portfolio-level totals for one window."""

    revenue: Number
    occupied_nights: int
    total_nights: int
    occupancy_rate: Number
    adr: Number
    rev_pan: Number = Field(alias="revPAN")
    avg_stay: Number
    reservation_count: int
    avg_revenue_per_booking: Number
    vacant_nights: int


class WindowAggregate(AnalyticsModel):
    """Everything the aggregator derives from a single window."""

    totals: WindowTotals
    by_property: tuple[PropertyMetrics, ...] = ()
    by_channel: tuple[ChannelMetrics, ...] = ()


class TrendSet(AnalyticsModel):
    """Signed percentage change, current window versus previous window."""

    revenue: int
    occupancy_rate: int
    adr: int
    rev_pan: int = Field(alias="revPAN")
    avg_stay: int
    reservation_count: int


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class AnalyticsResult(AnalyticsModel):
    """Complete analytics payload consumed by summary cards and rankings."""

    total_revenue: Number
    prev_revenue: Number
    total_nights: int
    prev_total_nights: int
    occupied_nights: int
    prev_occupied_nights: int
    occupancy_rate: Number
    prev_occupancy_rate: Number
    adr: Number
    prev_adr: Number
    rev_pan: Number = Field(alias="revPAN")
    prev_rev_pan: Number = Field(alias="prevRevPAN")
    avg_stay: Number
    prev_avg_stay: Number
    reservation_count: int
    prev_reservation_count: int
    trends: TrendSet
    property_count: int
    pending_requests: int
    by_property: tuple[PropertyMetrics, ...]
    by_channel: tuple[ChannelMetrics, ...]
    vacant_nights: int
    avg_revenue_per_booking: Number


class PortfolioAnalyticsResponse(AnalyticsModel):
    """Analytics result together with the windows it was computed over."""

    period: Period
    current_window: PeriodWindow
    previous_window: PeriodWindow
    analytics: AnalyticsResult
