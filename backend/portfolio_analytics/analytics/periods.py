"""Reporting period windows: the current window and the one it is compared to."""

from datetime import date, datetime, timedelta

from portfolio_analytics.schemas.analytics import Period, PeriodWindow, PeriodWindows


def _as_date(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def _shift_month(value: date, months: int) -> date:
    """First day of the month ``months`` away from ``value``'s month."""
    month_index = value.month - 1 + months
    return date(value.year + month_index // 12, month_index % 12 + 1, 1)


def resolve_period_windows(period: Period | str, now: date | datetime) -> PeriodWindows:
    """Return the current window for ``period`` and the full window before it.

    The current window always ends at ``now`` rather than at the end of the
    month/quarter/year, so a partially elapsed period is compared against the
    complete previous one.  ``now`` is passed in explicitly; callers decide
    which clock and timezone "today" comes from.
    """
    today = _as_date(now)
    period = Period(period)

    if period is Period.MONTH:
        start = today.replace(day=1)
        prev_start = _shift_month(start, -1)
    elif period is Period.QUARTER:
        start = date(today.year, (today.month - 1) // 3 * 3 + 1, 1)
        prev_start = _shift_month(start, -3)
    else:
        start = date(today.year, 1, 1)
        prev_start = date(today.year - 1, 1, 1)

    # The previous window ends on the last day before the current one starts.
    prev_end = start - timedelta(days=1)

    return PeriodWindows(
        current_window=PeriodWindow.between(start, today),
        previous_window=PeriodWindow.between(prev_start, prev_end),
    )
