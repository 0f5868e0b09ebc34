"""InstrumentPrice repository for price history operations."""

import uuid
from datetime import date

from sqlalchemy import select

from moneycookie.models.instrument_price import InstrumentPrice
from moneycookie.repositories.base import BaseRepository


class InstrumentPriceRepository(BaseRepository[InstrumentPrice]):
    """Repository for InstrumentPrice model.

    Example:
        >>> repo = InstrumentPriceRepository(InstrumentPrice, db)
        >>> latest = await repo.get_latest(instrument.id)
    """

    async def get_latest(self, instrument_id: uuid.UUID) -> InstrumentPrice | None:
        """Get the most recent price point of an instrument.

        Args:
            instrument_id: UUID of the instrument

        Returns:
            Latest price point if any price was recorded, None otherwise
        """
        result = await self.db.execute(
            select(InstrumentPrice)
            .where(InstrumentPrice.instrument_id == instrument_id)
            .order_by(InstrumentPrice.price_date.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_recorded_dates(self, instrument_id: uuid.UUID) -> set[date]:
        """Get the set of dates that already have a price for an instrument."""
        result = await self.db.execute(
            select(InstrumentPrice.price_date).where(
                InstrumentPrice.instrument_id == instrument_id
            )
        )
        return set(result.scalars().all())

    async def bulk_create(
        self,
        prices: list[InstrumentPrice],
    ) -> list[InstrumentPrice]:
        """Bulk insert price records.

        Args:
            prices: List of InstrumentPrice instances to insert

        Returns:
            List of inserted price instances (not yet committed)
        """
        self.db.add_all(prices)
        await self.db.flush()
        return prices

