"""Latest price lookup over the stored instrument price history."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.exceptions import InstrumentNotFoundError, NoPriceHistoryError
from moneycookie.models.instrument import Instrument
from moneycookie.models.instrument_price import InstrumentPrice
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.repositories.instrument_price import InstrumentPriceRepository

logger = logging.getLogger(__name__)


async def latest_price_point(db: AsyncSession, instrument_id: UUID) -> InstrumentPrice:
    """Get the most recent price point of a listed instrument.

    Args:
        db: Database session
        instrument_id: UUID of the instrument

    Returns:
        The newest InstrumentPrice row

    Raises:
        InstrumentNotFoundError: If the instrument is not in the catalog
        NoPriceHistoryError: If the instrument has no recorded prices
    """
    instrument = await InstrumentRepository(Instrument, db).get(instrument_id)
    if instrument is None:
        raise InstrumentNotFoundError(f"Instrument {instrument_id} is not listed")

    point = await InstrumentPriceRepository(InstrumentPrice, db).get_latest(instrument.id)
    if point is None:
        logger.warning(f"No price history recorded for {instrument.short_code}")
        raise NoPriceHistoryError(f"No price history for instrument {instrument.short_code}")

    return point


async def latest_price(db: AsyncSession, instrument_id: UUID) -> Decimal:
    """Resolve an instrument to its latest known price.

    Example:
        >>> price = await latest_price(db, holding.instrument_id)
    """
    point = await latest_price_point(db, instrument_id)
    return point.price
