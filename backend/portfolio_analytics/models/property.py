"""Property model — the rentable units that make up a portfolio."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_analytics.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Property(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A villa, apartment, or house listed in the portfolio."""

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    location: Mapped[str | None] = mapped_column(String(255), default=None)
    property_type: Mapped[str] = mapped_column(String(50), default="villa", server_default="villa")
    nightly_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    status: Mapped[str] = mapped_column(String(50), default="active", server_default="active", index=True)  # active, maintenance, inactive

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r}, status={self.status!r})>"
