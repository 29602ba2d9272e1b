"""SQLAlchemy models for Portfolio Analytics.

All models are imported here so that ``Base.metadata`` knows about every
table. If you add a new model, import it in this file.
"""

from portfolio_analytics.models.property import Property
from portfolio_analytics.models.reservation import Reservation
from portfolio_analytics.models.service_request import ServiceRequest

__all__ = [
    "Property",
    "Reservation",
    "ServiceRequest",
]
