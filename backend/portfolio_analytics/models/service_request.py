"""Service request model — cleaning, maintenance, and other property jobs."""

import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_analytics.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ServiceRequest(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """An operational request raised against a property."""

    __tablename__ = "service_requests"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[str] = mapped_column(String(50), default="pending", index=True)  # pending, in_progress, done, cancelled

    def __repr__(self) -> str:
        return f"<ServiceRequest(id={self.id}, property_id={self.property_id}, status={self.status!r})>"
