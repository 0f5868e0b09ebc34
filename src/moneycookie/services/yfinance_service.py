"""Daily closing prices for listed instruments from Yahoo Finance.

yfinance goes through ``requests``, so once ``configure_price_cache`` has
run at startup the history calls below are served from Redis when fresh.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal

import pandas as pd
import yfinance as yf

from moneycookie.core.config import settings
from moneycookie.core.constants import MarketDataConstants
from moneycookie.models.instrument_price import InstrumentPrice

logger = logging.getLogger(__name__)


class YFinanceError(Exception):
    """Anything that went wrong talking to Yahoo Finance."""


class InvalidSymbolError(YFinanceError):
    """Yahoo returned no history for the ticker."""


class APIError(YFinanceError):
    """The yfinance call itself failed."""


def yahoo_symbol(short_code: str, market: str | None) -> str:
    """Exchange short code to Yahoo ticker, e.g. ``005930`` on KOSPI is ``005930.KS``.

    Unknown or missing markets get no suffix.
    """
    suffix = settings.MARKET_TICKER_SUFFIXES.get((market or "").upper(), "")
    return short_code.strip() + suffix


def fetch_daily_closes(symbol: str, period: str | None = None) -> pd.DataFrame:
    """Download daily bars for ``symbol`` over ``period`` (``settings.PRICE_HISTORY_PERIOD`` by default).

    Raises:
        InvalidSymbolError: Yahoo has no bars for the ticker in that period
        APIError: the request failed
    """
    period = period or settings.PRICE_HISTORY_PERIOD
    try:
        history = yf.Ticker(symbol).history(
            period=period, interval=MarketDataConstants.PRICE_INTERVAL
        )
    except Exception as e:
        logger.error(f"Yahoo history request for {symbol} ({period}) failed: {e}")
        raise APIError(f"Failed to fetch price history for {symbol}: {e}") from e

    if history.empty:
        raise InvalidSymbolError(f"Yahoo has no {period} history for '{symbol}'")
    return history


def parse_daily_closes(
    df: pd.DataFrame,
    instrument_id: uuid.UUID,
    skip_dates: set[date] | None = None,
) -> list[InstrumentPrice]:
    """Turn the Close column into unsaved ``InstrumentPrice`` rows.

    Bars are dated in the exchange's own timezone. Missing closes and dates
    in ``skip_dates`` (or repeated within ``df``) produce no row. Closes are
    rounded to two decimals.
    """
    taken = set(skip_dates or ())
    rows: list[InstrumentPrice] = []

    for timestamp, close in df["Close"].items():
        if pd.isna(close):
            continue
        price_date = pd.Timestamp(timestamp).date()
        if price_date in taken:
            continue
        taken.add(price_date)
        rows.append(
            InstrumentPrice(
                id=uuid.uuid4(),
                instrument_id=instrument_id,
                price_date=price_date,
                price=Decimal(str(round(float(close), 2))),
            )
        )

    return rows
