"""Instrument model for listed stocks from the exchange catalog."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class Instrument(Base, TimestampMixin):
    """Tradable security identified by its exchange short code."""

    __tablename__ = "instruments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    short_code: Mapped[str] = mapped_column(String(12), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    market: Mapped[str | None] = mapped_column(String(20), nullable=True)
    last_synced_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Most recent first, so prices[0] is the current price
    prices: Mapped[list["InstrumentPrice"]] = relationship(
        "InstrumentPrice",
        back_populates="instrument",
        order_by="InstrumentPrice.price_date.desc()",
        cascade="all, delete-orphan",
    )
