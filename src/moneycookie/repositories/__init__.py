"""Repository layer for database operations.

This package centralizes all database access logic, separating data access
from the portfolio valuation rules in the service layer.

Repositories:
    - BaseRepository: Generic CRUD operations for any model
    - SectionRepository: Owner lookups, detail loading and row locking
    - HoldingRepository: Section-scoped holding queries
    - EvaluationRepository: Per-holding evaluations
    - TotalRatingRepository: Per-section aggregate ratings
    - InstrumentRepository: Instrument catalog lookups
    - InstrumentPriceRepository: Price history queries and bulk inserts

Usage:
    >>> from moneycookie.repositories import HoldingRepository
    >>> from moneycookie.models.holding import Holding
    >>>
    >>> holding_repo = HoldingRepository(Holding, db)
    >>> holdings = await holding_repo.get_by_section_id(section.id)
"""

from moneycookie.repositories.base import BaseRepository
from moneycookie.repositories.evaluation import EvaluationRepository
from moneycookie.repositories.holding import HoldingRepository
from moneycookie.repositories.instrument import InstrumentRepository
from moneycookie.repositories.instrument_price import InstrumentPriceRepository
from moneycookie.repositories.section import SectionRepository
from moneycookie.repositories.total_rating import TotalRatingRepository

__all__ = [
    "BaseRepository",
    "SectionRepository",
    "HoldingRepository",
    "EvaluationRepository",
    "TotalRatingRepository",
    "InstrumentRepository",
    "InstrumentPriceRepository",
]
