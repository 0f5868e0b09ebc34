"""Tests for section, holding, evaluation and total rating repositories."""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.models.evaluation import Evaluation
from moneycookie.models.holding import Holding
from moneycookie.models.instrument import Instrument
from moneycookie.models.section import Section
from moneycookie.models.total_rating import TotalRating
from moneycookie.repositories.evaluation import EvaluationRepository
from moneycookie.repositories.holding import HoldingRepository
from moneycookie.repositories.section import SectionRepository
from moneycookie.repositories.total_rating import TotalRatingRepository

pytestmark = pytest.mark.integration


async def _section_with_holding(
    db: AsyncSession, instrument: Instrument, owner: str = "cookie"
) -> tuple[Section, Holding]:
    section = await SectionRepository(Section, db).create(obj_in={"owner": owner, "title": "Test"})
    holding = await HoldingRepository(Holding, db).create(
        obj_in={
            "section_id": section.id,
            "instrument_id": instrument.id,
            "quantity": 10,
            "buy_avg_price": Decimal("100.00"),
            "buy_total_amount": Decimal("1000.00"),
            "buy_date": date(2026, 10, 1),
        }
    )
    await EvaluationRepository(Evaluation, db).create(
        obj_in={
            "holding_id": holding.id,
            "evaluation_rate": Decimal("50"),
            "evaluation_amount": Decimal("1500"),
        }
    )
    await TotalRatingRepository(TotalRating, db).create(
        obj_in={
            "section_id": section.id,
            "total_buy_amount": Decimal("1000"),
            "total_evaluation_amount": Decimal("1500"),
            "total_evaluation_rate": Decimal("50"),
        }
    )
    await db.commit()
    return section, holding


async def test_base_repository_crud(test_db: AsyncSession) -> None:
    """Test the generic create/get/update/delete operations."""
    repo = SectionRepository(Section, test_db)

    section = await repo.create(obj_in={"owner": "cookie", "title": "Draft"})
    assert await repo.exists(section.id)
    assert (await repo.get(section.id)).title == "Draft"

    updated = await repo.update(db_obj=section, obj_in={"title": "Final"})
    assert updated.title == "Final"
    assert [s.id for s in await repo.get_multi()] == [section.id]

    await repo.delete(id=section.id)
    assert not await repo.exists(section.id)

    with pytest.raises(ValueError):
        await repo.delete(id=uuid.uuid4())


async def test_get_with_details_loads_relationships(
    test_db: AsyncSession, test_instrument: Instrument
) -> None:
    """Test that holdings, evaluations and rating come back in one load."""
    section, holding = await _section_with_holding(test_db, test_instrument)

    loaded = await SectionRepository(Section, test_db).get_with_details(section.id)

    assert [h.id for h in loaded.holdings] == [holding.id]
    assert loaded.holdings[0].evaluation.evaluation_amount == Decimal("1500")
    assert loaded.total_rating.total_buy_amount == Decimal("1000")


async def test_get_by_owner(test_db: AsyncSession, test_instrument: Instrument) -> None:
    """Test owner filtering."""
    await _section_with_holding(test_db, test_instrument, owner="cookie")
    await _section_with_holding(test_db, test_instrument, owner="other")

    sections = await SectionRepository(Section, test_db).get_by_owner("cookie")

    assert [s.owner for s in sections] == ["cookie"]


async def test_holding_lookup_is_section_scoped(
    test_db: AsyncSession, test_instrument: Instrument
) -> None:
    """Test that a holding is only found through its own section."""
    section, holding = await _section_with_holding(test_db, test_instrument)
    repo = HoldingRepository(Holding, test_db)

    assert (await repo.get_by_id_and_section(holding.id, section.id)).id == holding.id
    assert await repo.get_by_id_and_section(holding.id, uuid.uuid4()) is None
    assert [h.id for h in await repo.get_by_section_id(section.id)] == [holding.id]


async def test_section_scoped_deletes(test_db: AsyncSession, test_instrument: Instrument) -> None:
    """Test the bulk deletes used when a section is removed."""
    section, holding = await _section_with_holding(test_db, test_instrument)
    other, other_holding = await _section_with_holding(test_db, test_instrument)

    assert await EvaluationRepository(Evaluation, test_db).delete_by_section(section.id) == 1
    assert await HoldingRepository(Holding, test_db).delete_by_section(section.id) == 1
    assert await TotalRatingRepository(TotalRating, test_db).delete_by_section(section.id) == 1
    assert await SectionRepository(Section, test_db).delete_by_id(section.id) == 1
    await test_db.commit()

    assert await EvaluationRepository(Evaluation, test_db).get_by_holding_id(holding.id) is None
    assert await EvaluationRepository(Evaluation, test_db).get_by_holding_id(other_holding.id)
    assert await TotalRatingRepository(TotalRating, test_db).get_by_section_id(other.id)
