"""TotalRating model: aggregate valuation of a whole section."""

import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class TotalRating(Base, TimestampMixin):
    """Sums over a section's live holdings, rewritten wholesale on every batch."""

    __tablename__ = "total_ratings"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    section_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("sections.id"), unique=True, index=True
    )
    total_buy_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    total_evaluation_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    total_evaluation_rate: Mapped[Decimal] = mapped_column(Numeric(12, 4))

    section: Mapped["Section"] = relationship("Section", back_populates="total_rating")
