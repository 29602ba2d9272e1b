"""Period-over-period percentage change."""

from decimal import ROUND_FLOOR, Decimal

HALF = Decimal("0.5")


def trend_percent(current: Decimal | int, previous: Decimal | int) -> int:
    """Signed whole-number percentage change from ``previous`` to ``current``.

    A zero baseline reports +100 when there is now something and 0 when there
    is still nothing, instead of dividing by zero.  Halves round toward
    positive infinity, so -2.5 % reports as -2.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    change = (Decimal(current) - Decimal(previous)) / Decimal(previous) * 100
    return int((change + HALF).to_integral_value(rounding=ROUND_FLOOR))
