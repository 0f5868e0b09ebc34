"""Instrument catalog ingestion from the exchange listing feed.

The feed answers a POST with JSON whose ``block1`` array holds one row per
listed stock, e.g.::

    {"block1": [{"short_code": "005930", "codeName": "삼성전자",
                 "marketEngName": "KOSPI", ...}]}

Rows are parsed into ``CatalogItem`` records and upserted into the
instruments table by short code.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.config import settings
from moneycookie.core.constants import MarketDataConstants
from moneycookie.core.exceptions import ExternalAPIError
from moneycookie.db.session import transactional
from moneycookie.models.instrument import Instrument
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.schemas.instrument import CatalogItem

logger = logging.getLogger(__name__)


async def fetch_catalog() -> dict[str, Any]:
    """Download the raw listing payload from the configured catalog URL.

    Returns:
        Decoded JSON payload

    Raises:
        ExternalAPIError: On HTTP failure or a non-JSON response
    """
    form = {"bld": settings.CATALOG_BLD, "mktsel": "ALL", "searchText": ""}
    try:
        async with httpx.AsyncClient(timeout=settings.CATALOG_TIMEOUT_SECONDS) as client:
            response = await client.post(settings.CATALOG_URL, data=form)
            response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        logger.error(f"HTTP error fetching instrument catalog: {e}")
        raise ExternalAPIError(f"Instrument catalog unavailable: {e}") from e
    except ValueError as e:
        logger.error(f"Instrument catalog returned invalid JSON: {e}")
        raise ExternalAPIError("Instrument catalog returned invalid JSON") from e


def parse_catalog(payload: dict[str, Any]) -> list[CatalogItem]:
    """Turn a raw catalog payload into listing records.

    Malformed rows are logged and skipped; a repeated short code keeps its
    first occurrence.

    Raises:
        ExternalAPIError: If the payload has no row array
    """
    rows = payload.get(MarketDataConstants.CATALOG_ROWS_KEY)
    if not isinstance(rows, list):
        raise ExternalAPIError("Instrument catalog payload has no listing rows")

    items: dict[str, CatalogItem] = {}
    for row in rows:
        try:
            item = CatalogItem(
                short_code=str(row["short_code"]).strip(),
                name=str(row["codeName"]).strip(),
                market=(row.get("marketEngName") or "").strip().upper() or None,
            )
        except (KeyError, TypeError, AttributeError, PydanticValidationError) as e:
            logger.warning(f"Skipping malformed catalog row {row!r}: {e}")
            continue
        items.setdefault(item.short_code, item)

    return list(items.values())


async def sync_catalog(
    db: AsyncSession,
    payload: dict[str, Any] | None = None,
) -> dict[str, int]:
    """Upsert the instrument catalog.

    Args:
        db: Database session
        payload: Raw feed payload; fetched from the catalog URL when omitted

    Returns:
        Counts of fetched, created and updated instruments
    """
    if payload is None:
        payload = await fetch_catalog()
    items = parse_catalog(payload)

    created = 0
    updated = 0
    async with transactional(db):
        repo = InstrumentRepository(Instrument, db)
        existing = await repo.get_by_short_codes([item.short_code for item in items])

        for item in items:
            instrument = existing.get(item.short_code)
            if instrument is None:
                db.add(Instrument(**item.model_dump()))
                created += 1
            elif (instrument.name, instrument.market) != (item.name, item.market):
                instrument.name = item.name
                instrument.market = item.market
                updated += 1

        await db.flush()

    logger.info(
        f"Synced instrument catalog: {len(items)} fetched, {created} created, {updated} updated"
    )
    return {"fetched": len(items), "created": created, "updated": updated}
