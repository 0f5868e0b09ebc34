"""Instrument catalog and price endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request

from moneycookie.core.config import settings
from moneycookie.core.deps import DBSession, PageParams
from moneycookie.core.rate_limit import limiter
from moneycookie.models.instrument import Instrument
from moneycookie.models.instrument_price import InstrumentPrice
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.schemas.instrument import (
    CatalogSyncResponse,
    InstrumentResponse,
    PricePointResponse,
    PriceSyncResponse,
)
from moneycookie.services import catalog_service, price_service, price_sync_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[InstrumentResponse])
async def list_instruments(
    db: DBSession,
    page: PageParams,
    query: Annotated[str | None, Query(max_length=100)] = None,
    market: Annotated[str | None, Query(max_length=20)] = None,
) -> list[Instrument]:
    """
    List listed instruments ordered by short code.

    Args:
        db: Database session
        page: Skip/limit pagination
        query: Fragment of the short code or name
        market: Market filter (e.g., "KOSPI")
    """
    repo = InstrumentRepository(Instrument, db)
    return await repo.search(query=query, market=market, skip=page.skip, limit=page.limit)


@router.get("/{instrument_id}/price", response_model=PricePointResponse)
async def get_latest_price(instrument_id: UUID, db: DBSession) -> InstrumentPrice:
    """
    Get the latest stored price of an instrument.

    Raises:
        InstrumentNotFoundError: 404 if the instrument is not listed
        NoPriceHistoryError: 404 if no price has been synced yet
    """
    return await price_service.latest_price_point(db, instrument_id)


@router.post("/sync", response_model=CatalogSyncResponse)
@limiter.limit(settings.SYNC_RATE_LIMIT)
async def sync_catalog(request: Request, db: DBSession) -> dict[str, int]:
    """
    Refresh the instrument catalog from the exchange listing feed.

    New listings are created and renamed or re-marketed ones updated.
    Rate limited because every call downloads the full listing.

    Raises:
        ExternalAPIError: 503 if the listing feed is unavailable
    """
    return await catalog_service.sync_catalog(db)


@router.post("/{instrument_id}/prices/sync", response_model=PriceSyncResponse)
@limiter.limit(settings.SYNC_RATE_LIMIT)
async def sync_prices(
    request: Request,
    instrument_id: UUID,
    db: DBSession,
    period: Annotated[str | None, Query(pattern=r"^\d+(d|mo|y)$|^max$")] = None,
) -> PriceSyncResponse:
    """
    Append daily closes from Yahoo Finance to an instrument's price history.

    Args:
        request: Incoming request (used by the rate limiter)
        instrument_id: Instrument to sync
        db: Database session
        period: yfinance history period, e.g. "5d" or "1mo"

    Raises:
        InstrumentNotFoundError: 404 if the instrument is not listed
        ExternalAPIError: 503 if Yahoo Finance has no data or fails
    """
    instrument, synced = await price_sync_service.sync_instrument_prices(
        db, instrument_id, period=period
    )
    return PriceSyncResponse(
        instrument=InstrumentResponse.model_validate(instrument),
        prices_synced=synced,
        message=f"Synced {synced} daily prices for {instrument.short_code}",
    )
