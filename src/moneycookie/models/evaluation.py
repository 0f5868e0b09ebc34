"""Evaluation model: current valuation of a single holding."""

import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneycookie.db.base import Base, TimestampMixin


class Evaluation(Base, TimestampMixin):
    """Return rate and market value of one holding at the last recompute."""

    __tablename__ = "evaluations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    holding_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("holdings.id"), unique=True, index=True
    )
    evaluation_rate: Mapped[Decimal] = mapped_column(Numeric(12, 4))  # percent, signed
    evaluation_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2))

    holding: Mapped["Holding"] = relationship("Holding", back_populates="evaluation")
