"""Service layer for portfolio sections.

A section's holdings, their evaluations and the section's total rating
move together. Every public mutation here runs inside one
``transactional()`` block, and every holding batch ends with a full
recompute of the total rating from the holdings currently in storage.
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.exceptions import (
    ConflictingBatchEntryError,
    HoldingNotFoundError,
    SectionNotFoundError,
)
from moneycookie.db.session import read_only_transaction, transactional
from moneycookie.models.evaluation import Evaluation
from moneycookie.models.holding import Holding
from moneycookie.models.section import Section
from moneycookie.models.total_rating import TotalRating
from moneycookie.repositories.evaluation import EvaluationRepository
from moneycookie.repositories.holding import HoldingRepository
from moneycookie.repositories.section import SectionRepository
from moneycookie.repositories.total_rating import TotalRatingRepository
from moneycookie.schemas.holding import (
    DeleteHoldingChange,
    HoldingChange,
    HoldingInput,
    HoldingRecord,
    InsertHoldingChange,
)
from moneycookie.services import price_service, valuation
from moneycookie.services.holding_builder import build_holding

logger = logging.getLogger(__name__)


async def get_sections_by_owner(db: AsyncSession, owner: str) -> list[Section]:
    """Get every section of an owner with holdings and ratings loaded."""
    async with read_only_transaction(db):
        return await SectionRepository(Section, db).get_by_owner(owner)


async def get_section(db: AsyncSession, section_id: UUID) -> Section:
    """Get one section with holdings, evaluations and total rating.

    Raises:
        SectionNotFoundError: If the section does not exist
    """
    async with read_only_transaction(db):
        return await _load_section(db, section_id)


async def create_section(
    db: AsyncSession,
    owner: str,
    title: str,
    initial_holdings: list[HoldingInput],
) -> Section:
    """Create a section together with its initial holdings and total rating.

    The section, each holding, each evaluation and the total rating are
    written in one transaction. An empty batch yields a zero total rating.

    Args:
        db: Database session
        owner: Owner identifier
        title: Section title
        initial_holdings: Holdings to create with the section (may be empty)

    Returns:
        The created section with details loaded

    Raises:
        ValidationError: If a holding has a non-positive quantity or price
        InstrumentNotFoundError: If a holding names an unlisted instrument
        NoPriceHistoryError: If a holding's instrument has no price yet

    Example:
        >>> section = await create_section(db, "cookie", "Long term", [holding_input])
        >>> section.total_rating.total_evaluation_rate
        Decimal('50.0000')
    """
    async with transactional(db):
        section = await SectionRepository(Section, db).create(
            obj_in={"owner": owner, "title": title}
        )

        total_buy_amount = Decimal("0")
        total_evaluation_amount = Decimal("0")
        for data in initial_holdings:
            holding, evaluation = await _insert_holding(db, section.id, data)
            total_buy_amount += holding.buy_total_amount
            total_evaluation_amount += evaluation.evaluation_amount

        await TotalRatingRepository(TotalRating, db).create(
            obj_in={
                "section_id": section.id,
                **_total_rating_values(total_buy_amount, total_evaluation_amount),
            }
        )

    logger.info(
        f"Created section {section.id} for {owner} with {len(initial_holdings)} holdings"
    )
    return await _load_section(db, section.id)


async def update_section(
    db: AsyncSession,
    section_id: UUID,
    *,
    title: str | None = None,
    holding_changes: list[HoldingChange] | None = None,
) -> Section:
    """Rename a section and/or apply a batch of holding changes.

    Batch items run strictly in the given order. After the batch, the
    total rating is recomputed from every holding the section has in
    storage. A rename without a batch leaves the total rating as it is.

    Args:
        db: Database session
        section_id: Section to update
        title: New title, or None to keep the current one
        holding_changes: Ordered insert/update/delete items, or None to leave
            holdings untouched

    Returns:
        The updated section with details loaded

    Raises:
        SectionNotFoundError: If the section does not exist
        HoldingNotFoundError: If an update/delete names a holding outside the section
        ConflictingBatchEntryError: If one holding is named twice in the batch
        InstrumentNotFoundError: If a holding names an unlisted instrument
        NoPriceHistoryError: If an instrument has no price yet
    """
    async with transactional(db):
        section_repo = SectionRepository(Section, db)
        section = await section_repo.get_for_update(section_id)
        if section is None:
            raise SectionNotFoundError(f"Section {section_id} not found")

        if holding_changes:
            _check_batch(holding_changes)

        if title is not None:
            await section_repo.update(db_obj=section, obj_in={"title": title})

        if holding_changes is not None:
            counts = await _apply_batch(db, section.id, holding_changes)
            logger.info(
                f"Applied batch to section {section.id}: "
                f"{counts['insert']} inserted, {counts['update']} updated, "
                f"{counts['delete']} deleted"
            )
            await _recompute_total_rating(db, section.id)

    return await _load_section(db, section_id)


async def refresh_section(db: AsyncSession, section_id: UUID) -> Section:
    """Re-evaluate every holding at current prices and rewrite the total rating.

    Raises:
        SectionNotFoundError: If the section does not exist
    """
    async with transactional(db):
        section = await SectionRepository(Section, db).get_for_update(section_id)
        if section is None:
            raise SectionNotFoundError(f"Section {section_id} not found")

        await _recompute_total_rating(db, section.id)

    return await _load_section(db, section_id)


async def delete_section(db: AsyncSession, section_id: UUID) -> None:
    """Delete a section with its evaluations, holdings and total rating.

    Each of the four deletions is an explicit statement in one transaction;
    nothing depends on database-level cascades.

    Raises:
        SectionNotFoundError: If the section does not exist
    """
    async with transactional(db):
        section_repo = SectionRepository(Section, db)
        section = await section_repo.get_for_update(section_id)
        if section is None:
            raise SectionNotFoundError(f"Section {section_id} not found")

        evaluations = await EvaluationRepository(Evaluation, db).delete_by_section(section_id)
        holdings = await HoldingRepository(Holding, db).delete_by_section(section_id)
        await TotalRatingRepository(TotalRating, db).delete_by_section(section_id)
        await section_repo.delete_by_id(section_id)

    logger.info(
        f"Deleted section {section_id} with {holdings} holdings and {evaluations} evaluations"
    )


async def _load_section(db: AsyncSession, section_id: UUID) -> Section:
    section = await SectionRepository(Section, db).get_with_details(section_id)
    if section is None:
        raise SectionNotFoundError(f"Section {section_id} not found")
    return section


def _check_batch(holding_changes: list[HoldingChange]) -> None:
    """Reject batches that name one existing holding more than once."""
    seen: set[UUID] = set()
    for change in holding_changes:
        if isinstance(change, InsertHoldingChange):
            continue
        if change.holding_id in seen:
            raise ConflictingBatchEntryError(
                f"Holding {change.holding_id} appears more than once in the batch"
            )
        seen.add(change.holding_id)


async def _apply_batch(
    db: AsyncSession,
    section_id: UUID,
    holding_changes: list[HoldingChange],
) -> dict[str, int]:
    holding_repo = HoldingRepository(Holding, db)
    evaluation_repo = EvaluationRepository(Evaluation, db)
    counts = {"insert": 0, "update": 0, "delete": 0}

    for change in holding_changes:
        # Delete items carry only an id, so they are classified first
        if isinstance(change, DeleteHoldingChange):
            await _get_section_holding(holding_repo, change.holding_id, section_id)
            await evaluation_repo.delete_by_holding_id(change.holding_id)
            await holding_repo.delete_by_id(change.holding_id)
            counts["delete"] += 1
            continue

        if isinstance(change, InsertHoldingChange):
            await _insert_holding(db, section_id, change.holding)
            counts["insert"] += 1
            continue

        existing = await _get_section_holding(holding_repo, change.holding_id, section_id)
        record = build_holding(section_id, change.holding)
        values = await _evaluate(db, record)
        holding = await holding_repo.update(db_obj=existing, obj_in=record)
        await _save_evaluation(evaluation_repo, holding.id, values)
        counts["update"] += 1

    return counts


async def _get_section_holding(
    holding_repo: HoldingRepository,
    holding_id: UUID,
    section_id: UUID,
) -> Holding:
    holding = await holding_repo.get_by_id_and_section(holding_id, section_id)
    if holding is None:
        raise HoldingNotFoundError(f"Holding {holding_id} not found in section {section_id}")
    return holding


async def _insert_holding(
    db: AsyncSession,
    section_id: UUID,
    data: HoldingInput,
) -> tuple[Holding, Evaluation]:
    record = build_holding(section_id, data)
    # Price first: an unlisted instrument fails before any row is written
    values = await _evaluate(db, record)
    holding = await HoldingRepository(Holding, db).create(obj_in=record)
    evaluation = await EvaluationRepository(Evaluation, db).create(
        obj_in={"holding_id": holding.id, **values}
    )
    return holding, evaluation


async def _evaluate(db: AsyncSession, holding: Holding | HoldingRecord) -> dict[str, Decimal]:
    """Evaluation values of a holding at the instrument's latest price."""
    current_price = await price_service.latest_price(db, holding.instrument_id)
    return {
        "evaluation_rate": valuation.evaluation_rate(current_price, holding.buy_avg_price),
        "evaluation_amount": valuation.evaluation_amount(
            current_price, holding.buy_avg_price, holding.quantity
        ),
    }


async def _save_evaluation(
    evaluation_repo: EvaluationRepository,
    holding_id: UUID,
    values: dict[str, Decimal],
) -> Evaluation:
    evaluation = await evaluation_repo.get_by_holding_id(holding_id)
    if evaluation is None:
        return await evaluation_repo.create(obj_in={"holding_id": holding_id, **values})
    return await evaluation_repo.update(db_obj=evaluation, obj_in=values)


def _total_rating_values(
    total_buy_amount: Decimal,
    total_evaluation_amount: Decimal,
) -> dict[str, Any]:
    return {
        "total_buy_amount": total_buy_amount,
        "total_evaluation_amount": total_evaluation_amount,
        "total_evaluation_rate": valuation.total_evaluation_rate(
            total_buy_amount, total_evaluation_amount
        ),
    }


async def _recompute_total_rating(db: AsyncSession, section_id: UUID) -> TotalRating:
    """Rebuild a section's total rating from the holdings in storage.

    Every current holding is re-evaluated and its evaluation rewritten, so
    the rating always equals the sum of the stored evaluations.
    """
    holdings = await HoldingRepository(Holding, db).get_by_section_id(section_id)
    evaluation_repo = EvaluationRepository(Evaluation, db)

    total_buy_amount = Decimal("0")
    total_evaluation_amount = Decimal("0")
    for holding in holdings:
        values = await _evaluate(db, holding)
        await _save_evaluation(evaluation_repo, holding.id, values)
        total_buy_amount += holding.buy_total_amount
        total_evaluation_amount += values["evaluation_amount"]

    rating_repo = TotalRatingRepository(TotalRating, db)
    rating_values = _total_rating_values(total_buy_amount, total_evaluation_amount)
    rating = await rating_repo.get_by_section_id(section_id)
    if rating is None:
        rating = await rating_repo.create(obj_in={"section_id": section_id, **rating_values})
    else:
        rating = await rating_repo.update(db_obj=rating, obj_in=rating_values)

    logger.info(
        f"Recomputed total rating for section {section_id}: "
        f"{len(holdings)} holdings, buy {total_buy_amount}, "
        f"evaluation {total_evaluation_amount}"
    )
    return rating
