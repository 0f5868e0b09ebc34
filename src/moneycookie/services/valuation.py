"""Pure valuation arithmetic for holdings and sections.

No I/O and no state: every function maps numbers to numbers. Amounts are
``Decimal`` currency values; rates are signed percentages rounded to
``RATE_QUANTUM``.
"""

from decimal import ROUND_HALF_UP, Decimal

from moneycookie.core.constants import EMPTY_PORTFOLIO_RATE, PERCENT, RATE_QUANTUM
from moneycookie.core.exceptions import DivisionUndefinedError, ValidationError


def _quantize_rate(rate: Decimal) -> Decimal:
    return rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def total_amount(avg_price: Decimal, quantity: int) -> Decimal:
    """Total buy amount of a position.

    Args:
        avg_price: Average buy price per share, must be >= 0
        quantity: Number of shares, must be >= 0

    Returns:
        ``avg_price * quantity``

    Raises:
        ValidationError: If either input is negative

    Example:
        >>> total_amount(Decimal("100"), 10)
        Decimal('1000')
    """
    if avg_price < 0:
        raise ValidationError("Average price cannot be negative")
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative")
    return avg_price * quantity


def evaluation_amount(current_price: Decimal, avg_price: Decimal, quantity: int) -> Decimal:
    """Gross market value of a position at the current price.

    This is the value of the shares, not the profit; ``evaluation_rate``
    carries the profit. ``avg_price`` is accepted so both evaluation
    functions take the same holding inputs.
    """
    return current_price * quantity


def evaluation_rate(current_price: Decimal, avg_price: Decimal) -> Decimal:
    """Return rate of a position as a signed percentage.

    Args:
        current_price: Latest market price
        avg_price: Average buy price

    Returns:
        ``(current_price - avg_price) / avg_price * 100``

    Raises:
        DivisionUndefinedError: If ``avg_price`` is zero

    Example:
        >>> evaluation_rate(Decimal("150"), Decimal("100"))
        Decimal('50.0000')
    """
    if avg_price == 0:
        raise DivisionUndefinedError()
    return _quantize_rate((current_price - avg_price) / avg_price * PERCENT)


def total_evaluation_rate(total_buy_amount: Decimal, total_evaluation_amount: Decimal) -> Decimal:
    """Return rate of a whole section as a signed percentage.

    An empty section has nothing invested; its rate is
    ``EMPTY_PORTFOLIO_RATE`` instead of a division error.
    """
    if total_buy_amount == 0:
        return _quantize_rate(EMPTY_PORTFOLIO_RATE)
    return _quantize_rate(
        (total_evaluation_amount - total_buy_amount) / total_buy_amount * PERCENT
    )
