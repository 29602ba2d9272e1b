"""Composite performance score and property ranking."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from portfolio_analytics.schemas.analytics import PropertyMetrics

REVENUE_WEIGHT = Decimal("0.4")
OCCUPANCY_WEIGHT = Decimal("0.4")
STAY_WEIGHT = Decimal("0.2")

MAX_SCORE = 100
_HUNDRED = Decimal(100)
_ONE = Decimal(1)


def score_property(
    metrics: PropertyMetrics,
    portfolio_revenue: Decimal,
    portfolio_avg_stay: Decimal,
) -> int:
    """Blend revenue share, occupancy, and stay length into a 0-100 score.

    Revenue is measured against half of the portfolio's revenue and stay
    length against twice the portfolio average, each capped at 100.
    Occupancy is used as-is: an occupancy above 100 % still counts in full
    before the final cap.
    """
    revenue_score = min(
        _HUNDRED,
        metrics.revenue / max(portfolio_revenue * Decimal("0.5"), _ONE) * _HUNDRED,
    )
    occupancy_score = metrics.occupancy_rate
    stay_score = min(
        _HUNDRED,
        metrics.avg_stay / max(portfolio_avg_stay * 2, _ONE) * _HUNDRED,
    )

    blended = (
        revenue_score * REVENUE_WEIGHT
        + occupancy_score * OCCUPANCY_WEIGHT
        + stay_score * STAY_WEIGHT
    )
    return min(MAX_SCORE, int(blended.quantize(_ONE, rounding=ROUND_HALF_UP)))


def rank_properties(
    properties: Iterable[PropertyMetrics],
    portfolio_revenue: Decimal,
    portfolio_avg_stay: Decimal,
) -> tuple[PropertyMetrics, ...]:
    """Score every property and order them best first.

    Equal scores are ordered by property id so repeated runs rank identically.
    """
    scored = [
        prop.model_copy(update={"score": score_property(prop, portfolio_revenue, portfolio_avg_stay)})
        for prop in properties
    ]
    scored.sort(key=lambda prop: (-prop.score, prop.id))
    return tuple(scored)
