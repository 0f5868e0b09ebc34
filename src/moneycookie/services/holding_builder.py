"""Build persistable holding values from client input."""

from uuid import UUID

from moneycookie.core.exceptions import ValidationError
from moneycookie.schemas.holding import HoldingInput, HoldingRecord
from moneycookie.services import valuation


def build_holding(section_id: UUID, data: HoldingInput) -> HoldingRecord:
    """Copy holding input under a section and derive its total buy amount.

    The total is always recomputed here, so a stale client view can never
    break ``buy_total_amount == quantity * buy_avg_price``.

    Raises:
        ValidationError: If quantity or average price is not positive
    """
    if data.quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")
    if data.buy_avg_price <= 0:
        raise ValidationError("Average buy price must be greater than 0")

    return HoldingRecord(
        section_id=section_id,
        instrument_id=data.instrument_id,
        quantity=data.quantity,
        buy_avg_price=data.buy_avg_price,
        buy_total_amount=valuation.total_amount(data.buy_avg_price, data.quantity),
        buy_date=data.buy_date,
    )
