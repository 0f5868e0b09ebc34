"""Application-wide constants and configuration values.

Constants are organized into logical groups for easy navigation and maintenance.
"""

from decimal import Decimal


class ValuationConstants:
    """Constants for holding and section valuation arithmetic."""

    # Rates are stored as percentages with four fractional digits
    RATE_QUANTUM = Decimal("0.0001")

    # Percentage multiplier applied to return ratios
    PERCENT = Decimal("100")

    # Section-level rate reported when nothing has been invested yet
    EMPTY_PORTFOLIO_RATE = Decimal("0")


class MarketDataConstants:
    """Constants for instrument catalog and price history ingestion."""

    # Key of the row array inside the catalog feed payload
    CATALOG_ROWS_KEY = "block1"

    # Yahoo Finance interval used for price history sync
    PRICE_INTERVAL = "1d"


class APIConstants:
    """Constants for API behavior, limits, and defaults."""

    # Pagination defaults for list endpoints
    DEFAULT_PAGE_SIZE = 100  # Default items per page
    MAX_PAGE_SIZE = 1000  # Maximum allowed items per page


RATE_QUANTUM = ValuationConstants.RATE_QUANTUM
PERCENT = ValuationConstants.PERCENT
EMPTY_PORTFOLIO_RATE = ValuationConstants.EMPTY_PORTFOLIO_RATE
