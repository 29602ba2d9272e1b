"""Stay length and reservation status helpers."""

import math
from datetime import date
from typing import Protocol

EXCLUDED_STATUSES = frozenset({"CANCELLED", "CANCELED", "NO_SHOW"})


class _HasStatus(Protocol):
    status: str | None


class _HasStayDates(Protocol):
    check_in: date | None
    check_out: date | None


def stay_nights(check_in: date | None, check_out: date | None) -> int:
    """Number of nights between two dates; 0 when a date is missing or inverted."""
    if check_in is None or check_out is None:
        return 0
    return max(0, math.ceil((check_out - check_in).total_seconds() / 86400))


def reservation_nights(reservation: _HasStayDates) -> int:
    return stay_nights(reservation.check_in, reservation.check_out)


def is_counted(reservation: _HasStatus) -> bool:
    """Whether a reservation contributes to revenue, occupancy, and stay metrics.

    Everything except cancelled and no-show reservations is counted, whatever
    the spelling or case the channel used.
    """
    status = (reservation.status or "").strip().upper().replace("-", "_").replace(" ", "_")
    return status not in EXCLUDED_STATUSES
