"""InstrumentPrice model: one observed closing price per instrument per day."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class InstrumentPrice(Base, TimestampMixin):
    """Price point in an instrument's history."""

    __tablename__ = "instrument_prices"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    instrument_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("instruments.id", ondelete="CASCADE"), index=True
    )
    price_date: Mapped[date] = mapped_column(Date)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2))

    instrument: Mapped["Instrument"] = relationship("Instrument", back_populates="prices")

    __table_args__ = (
        UniqueConstraint("instrument_id", "price_date", name="uq_instrument_price_date"),
        Index("idx_instrument_price_date", "instrument_id", "price_date"),
    )
