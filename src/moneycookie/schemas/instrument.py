"""Instrument catalog and price schemas."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CatalogItem(BaseModel):
    """One listing parsed from the exchange catalog feed."""

    short_code: str = Field(..., min_length=1, max_length=12)
    name: str = Field(..., min_length=1, max_length=255)
    market: str | None = Field(None, max_length=20)


class InstrumentResponse(CatalogItem):
    """Schema for instrument response."""

    id: uuid.UUID
    last_synced_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PricePointResponse(BaseModel):
    """Schema for an instrument's latest price point."""

    instrument_id: uuid.UUID
    price_date: date
    price: Decimal

    model_config = {"from_attributes": True}


class CatalogSyncResponse(BaseModel):
    """Schema for catalog ingestion result."""

    fetched: int
    created: int
    updated: int


class PriceSyncResponse(BaseModel):
    """Schema for price history sync result."""

    instrument: InstrumentResponse
    prices_synced: int
    message: str
