"""Instrument repository for catalog database operations."""

from sqlalchemy import select

from moneycookie.models.instrument import Instrument
from moneycookie.repositories.base import BaseRepository


class InstrumentRepository(BaseRepository[Instrument]):
    """Repository for Instrument model with short code lookups and search.

    Example:
        >>> repo = InstrumentRepository(Instrument, db)
        >>> samsung = await repo.get_by_short_code("005930")
    """

    async def get_by_short_code(self, short_code: str) -> Instrument | None:
        """Get instrument by its exchange short code.

        Args:
            short_code: Exchange short code (e.g., "005930")

        Returns:
            Instrument if listed, None otherwise
        """
        result = await self.db.execute(
            select(Instrument).where(Instrument.short_code == short_code.strip())
        )
        return result.scalar_one_or_none()

    async def get_by_short_codes(self, short_codes: list[str]) -> dict[str, Instrument]:
        """Get the listed instruments among a set of short codes.

        Args:
            short_codes: Short codes to look up

        Returns:
            Mapping of short code to instrument, for codes that are listed
        """
        if not short_codes:
            return {}

        result = await self.db.execute(
            select(Instrument).where(Instrument.short_code.in_(short_codes))
        )
        return {instrument.short_code: instrument for instrument in result.scalars().all()}

    async def search(
        self,
        *,
        query: str | None = None,
        market: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Instrument]:
        """List instruments, optionally filtered by market and name/code.

        Args:
            query: Case-insensitive fragment of short code or name
            market: Market name (e.g., "KOSPI")
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            Instruments ordered by short code
        """
        stmt = select(Instrument)

        if market:
            stmt = stmt.where(Instrument.market == market.upper())
        if query:
            pattern = f"%{query}%"
            stmt = stmt.where(
                (Instrument.short_code.ilike(pattern)) | (Instrument.name.ilike(pattern))
            )

        result = await self.db.execute(
            stmt.order_by(Instrument.short_code).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
