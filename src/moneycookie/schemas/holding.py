"""Holding schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class HoldingInput(BaseModel):
    """Fully specified holding as submitted by a client.

    Carries no total amount; the holding builder derives it.
    """

    instrument_id: UUID
    quantity: int = Field(..., gt=0)
    buy_avg_price: Decimal = Field(..., gt=0, decimal_places=2)
    buy_date: date

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        """Validate quantity is positive."""
        if v <= 0:
            raise ValueError("Quantity must be greater than 0")
        return v

    @field_validator("buy_avg_price")
    @classmethod
    def validate_price(cls, v: Decimal) -> Decimal:
        """Validate average buy price is positive."""
        if v <= 0:
            raise ValueError("Average buy price must be greater than 0")
        return v


class HoldingRecord(BaseModel):
    """Persistable holding values produced by the holding builder."""

    section_id: UUID
    instrument_id: UUID
    quantity: int
    buy_avg_price: Decimal
    buy_total_amount: Decimal
    buy_date: date


class InsertHoldingChange(BaseModel):
    """Batch item adding a new holding to the section."""

    intent: Literal["insert"] = "insert"
    holding: HoldingInput


class UpdateHoldingChange(BaseModel):
    """Batch item overwriting an existing holding in place."""

    intent: Literal["update"] = "update"
    holding_id: UUID
    holding: HoldingInput


class DeleteHoldingChange(BaseModel):
    """Batch item removing a holding and its evaluation."""

    intent: Literal["delete"] = "delete"
    holding_id: UUID


HoldingChange = Annotated[
    InsertHoldingChange | UpdateHoldingChange | DeleteHoldingChange,
    Field(discriminator="intent"),
]


class EvaluationResponse(BaseModel):
    """Schema for a holding's evaluation."""

    evaluation_rate: Decimal
    evaluation_amount: Decimal
    updated_at: datetime

    model_config = {"from_attributes": True}


class HoldingResponse(BaseModel):
    """Schema for holding response."""

    id: UUID
    section_id: UUID
    instrument_id: UUID
    quantity: int
    buy_avg_price: Decimal
    buy_total_amount: Decimal
    buy_date: date
    evaluation: EvaluationResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
