"""Holding model for stock positions inside a section."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class Holding(Base, TimestampMixin):
    """Position in one instrument.

    buy_total_amount is always quantity * buy_avg_price; it is written by
    the holding builder and never taken from the caller.
    """

    __tablename__ = "holdings"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    section_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("sections.id"), index=True)
    instrument_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("instruments.id", ondelete="RESTRICT"), index=True
    )
    quantity: Mapped[int] = mapped_column(Integer)
    buy_avg_price: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    buy_total_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    buy_date: Mapped[date] = mapped_column(Date)

    # Relationships
    section: Mapped["Section"] = relationship("Section", back_populates="holdings")
    instrument: Mapped["Instrument"] = relationship("Instrument")
    evaluation: Mapped["Evaluation"] = relationship(
        "Evaluation", back_populates="holding", uselist=False
    )
