"""Schemas package."""

from moneycookie.schemas.holding import (
    DeleteHoldingChange,
    EvaluationResponse,
    HoldingChange,
    HoldingInput,
    HoldingRecord,
    HoldingResponse,
    InsertHoldingChange,
    UpdateHoldingChange,
)
from moneycookie.schemas.instrument import (
    CatalogItem,
    CatalogSyncResponse,
    InstrumentResponse,
    PricePointResponse,
    PriceSyncResponse,
)
from moneycookie.schemas.section import (
    SectionCreate,
    SectionResponse,
    SectionUpdate,
    TotalRatingResponse,
)

__all__ = [
    # Holding schemas
    "HoldingInput",
    "HoldingRecord",
    "HoldingResponse",
    "EvaluationResponse",
    # Batch change variants
    "HoldingChange",
    "InsertHoldingChange",
    "UpdateHoldingChange",
    "DeleteHoldingChange",
    # Section schemas
    "SectionCreate",
    "SectionUpdate",
    "SectionResponse",
    "TotalRatingResponse",
    # Instrument schemas
    "CatalogItem",
    "InstrumentResponse",
    "PricePointResponse",
    "CatalogSyncResponse",
    "PriceSyncResponse",
]
