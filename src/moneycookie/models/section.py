"""Section model: a named group of holdings owned by one investor."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class Section(Base, TimestampMixin):
    """Portfolio section with its holdings and aggregate rating.

    Relationships carry no ORM cascade: the section service deletes
    evaluations, holdings and the total rating explicitly.
    """

    __tablename__ = "sections"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    owner: Mapped[str] = mapped_column(String(50), index=True)
    title: Mapped[str] = mapped_column(String(100))
    create_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

    # Relationships
    holdings: Mapped[list["Holding"]] = relationship(
        "Holding",
        back_populates="section",
        order_by="(Holding.buy_date, Holding.created_at)",
    )
    total_rating: Mapped["TotalRating"] = relationship(
        "TotalRating", back_populates="section", uselist=False
    )
