"""Section schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from moneycookie.schemas.holding import HoldingChange, HoldingInput, HoldingResponse


class SectionCreate(BaseModel):
    """Schema for creating a section with an optional initial batch."""

    owner: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=100)
    holdings: list[HoldingInput] = Field(default_factory=list)


class SectionUpdate(BaseModel):
    """Schema for renaming a section and/or applying a holding batch.

    ``holding_changes=None`` leaves holdings and the total rating untouched;
    an empty list still triggers a full total rating recompute.
    """

    title: str | None = Field(None, min_length=1, max_length=100)
    holding_changes: list[HoldingChange] | None = None


class TotalRatingResponse(BaseModel):
    """Schema for a section's aggregate rating."""

    total_buy_amount: Decimal
    total_evaluation_amount: Decimal
    total_evaluation_rate: Decimal
    updated_at: datetime

    model_config = {"from_attributes": True}


class SectionResponse(BaseModel):
    """Schema for section response with holdings and rating."""

    id: UUID
    owner: str
    title: str
    create_date: datetime
    holdings: list[HoldingResponse] = []
    total_rating: TotalRatingResponse | None = None

    model_config = {"from_attributes": True}
