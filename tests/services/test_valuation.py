"""Tests for the valuation arithmetic."""

from decimal import Decimal

import pytest

from moneycookie.core.exceptions import DivisionUndefinedError, ValidationError
from moneycookie.services import valuation


@pytest.mark.parametrize(
    ("avg_price", "quantity", "expected"),
    [
        (Decimal("100"), 10, Decimal("1000")),
        (Decimal("20.50"), 3, Decimal("61.50")),
        (Decimal("0"), 7, Decimal("0")),
        (Decimal("99.99"), 0, Decimal("0")),
    ],
)
def test_total_amount_is_price_times_quantity(avg_price, quantity, expected) -> None:
    """Test that total amount is exactly avg_price * quantity."""
    assert valuation.total_amount(avg_price, quantity) == expected


def test_total_amount_rejects_negative_inputs() -> None:
    """Test that negative price or quantity is a validation error."""
    with pytest.raises(ValidationError):
        valuation.total_amount(Decimal("-1"), 10)
    with pytest.raises(ValidationError):
        valuation.total_amount(Decimal("10"), -1)


def test_evaluation_amount_is_market_value() -> None:
    """Test that evaluation amount is the gross value at the current price."""
    assert valuation.evaluation_amount(Decimal("150"), Decimal("100"), 10) == Decimal("1500")


def test_evaluation_rate_gain_and_loss() -> None:
    """Test signed percentage rates for gains and losses."""
    assert valuation.evaluation_rate(Decimal("150"), Decimal("100")) == Decimal("50.0000")
    assert valuation.evaluation_rate(Decimal("75"), Decimal("100")) == Decimal("-25.0000")
    assert valuation.evaluation_rate(Decimal("100"), Decimal("100")) == Decimal("0.0000")


def test_evaluation_rate_rounds_half_up_to_four_places() -> None:
    """Test rate rounding: 1/3 gain is 33.3333 and 2/3 gain is 66.6667."""
    assert valuation.evaluation_rate(Decimal("4"), Decimal("3")) == Decimal("33.3333")
    assert valuation.evaluation_rate(Decimal("5"), Decimal("3")) == Decimal("66.6667")


def test_evaluation_rate_zero_avg_price_is_undefined() -> None:
    """Test that a zero cost basis raises instead of dividing by zero."""
    with pytest.raises(DivisionUndefinedError) as exc_info:
        valuation.evaluation_rate(Decimal("150"), Decimal("0"))

    assert exc_info.value.error_code == "DIVISION_UNDEFINED"
    assert exc_info.value.status_code == 400


def test_total_evaluation_rate() -> None:
    """Test section-level rate over summed amounts."""
    assert valuation.total_evaluation_rate(Decimal("1000"), Decimal("1500")) == Decimal("50.0000")
    assert valuation.total_evaluation_rate(Decimal("1100"), Decimal("1600")) == Decimal("45.4545")


def test_total_evaluation_rate_empty_section_is_zero() -> None:
    """Test that nothing invested yields a zero rate, not an error."""
    assert valuation.total_evaluation_rate(Decimal("0"), Decimal("0")) == Decimal("0.0000")
