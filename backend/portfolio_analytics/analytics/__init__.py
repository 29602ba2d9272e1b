"""Portfolio performance analytics engine.

Pure, synchronous functions over already-fetched records; see
``portfolio_analytics.services.analytics_service`` for the database-backed
entry point.
"""

from portfolio_analytics.analytics.aggregation import aggregate_window, channel_key
from portfolio_analytics.analytics.engine import compute_analytics, compute_trends
from portfolio_analytics.analytics.periods import resolve_period_windows
from portfolio_analytics.analytics.scoring import rank_properties, score_property
from portfolio_analytics.analytics.stays import is_counted, stay_nights
from portfolio_analytics.analytics.trends import trend_percent

__all__ = [
    "aggregate_window",
    "channel_key",
    "compute_analytics",
    "compute_trends",
    "is_counted",
    "rank_properties",
    "resolve_period_windows",
    "score_property",
    "stay_nights",
    "trend_percent",
]
