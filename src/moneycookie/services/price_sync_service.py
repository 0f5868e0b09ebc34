"""Sync stored price history for listed instruments from Yahoo Finance."""

import asyncio
import logging
from datetime import UTC, datetime
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.exceptions import ExternalAPIError, InstrumentNotFoundError
from moneycookie.db.session import transactional
from moneycookie.models.instrument import Instrument
from moneycookie.models.instrument_price import InstrumentPrice
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.repositories.instrument_price import InstrumentPriceRepository
from moneycookie.services.yfinance_service import (
    APIError,
    InvalidSymbolError,
    fetch_daily_closes,
    parse_daily_closes,
    yahoo_symbol,
)

logger = logging.getLogger(__name__)


async def sync_instrument_prices(
    db: AsyncSession,
    instrument_id: UUID,
    *,
    period: str | None = None,
) -> tuple[Instrument, int]:
    """Fetch daily closes for an instrument and store the new ones.

    Dates that already have a price are left untouched, so repeated syncs
    only append.

    Args:
        db: Database session
        instrument_id: Instrument to sync
        period: yfinance period, defaults to the configured history period

    Returns:
        Tuple of the refreshed instrument and the number of prices stored

    Raises:
        InstrumentNotFoundError: If the instrument is not listed
        ExternalAPIError: If Yahoo Finance has no data or fails
    """
    async with transactional(db):
        instrument = await InstrumentRepository(Instrument, db).get(instrument_id)
        if instrument is None:
            raise InstrumentNotFoundError(f"Instrument {instrument_id} is not listed")

    # No transaction is open while Yahoo is queried
    symbol = yahoo_symbol(instrument.short_code, instrument.market)
    logger.info(f"Fetching daily closes for {instrument.short_code} as {symbol}")
    loop = asyncio.get_running_loop()
    try:
        df = await loop.run_in_executor(None, partial(fetch_daily_closes, symbol, period=period))
    except InvalidSymbolError as e:
        raise ExternalAPIError(f"No Yahoo Finance data for {symbol}") from e
    except APIError as e:
        raise ExternalAPIError(f"Yahoo Finance API error: {e}") from e

    async with transactional(db):
        price_repo = InstrumentPriceRepository(InstrumentPrice, db)
        recorded = await price_repo.get_recorded_dates(instrument.id)
        prices = parse_daily_closes(df, instrument.id, skip_dates=recorded)
        if prices:
            await price_repo.bulk_create(prices)

        instrument.last_synced_at = datetime.now(UTC)
        await db.flush()

    await db.refresh(instrument)
    logger.info(f"Synced {len(prices)} prices for {instrument.short_code}")
    return instrument, len(prices)
