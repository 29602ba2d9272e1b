"""Reservation model — stays booked against a property, from any channel."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_analytics.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Reservation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A guest stay at a property.

    ``check_in``/``check_out`` are nullable because channel imports (iCal feeds,
    OTA webhooks) occasionally deliver incomplete records; analytics treats a
    missing date as a zero-night stay.
    """

    __tablename__ = "reservations"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_name: Mapped[str | None] = mapped_column(String(255), default=None)
    check_in: Mapped[date | None] = mapped_column(Date, nullable=True)
    check_out: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50),
        default="confirmed",
        index=True,
    )  # pending, confirmed, checked_in, checked_out, cancelled, no_show
    total_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    source: Mapped[str | None] = mapped_column(String(100), default=None)  # airbnb, booking, direct, ...
    source_name: Mapped[str | None] = mapped_column(String(100), default=None)  # display name, e.g. "Booking.com"

    __table_args__ = (
        Index("ix_reservations_check_in", "check_in"),
        Index("ix_reservations_check_out", "check_out"),
    )

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, property_id={self.property_id}, "
            f"check_in={self.check_in}, status={self.status})>"
        )
