"""Portfolio section endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from moneycookie.core.config import settings
from moneycookie.core.deps import DBSession
from moneycookie.core.rate_limit import limiter
from moneycookie.models.section import Section
from moneycookie.schemas.section import SectionCreate, SectionResponse, SectionUpdate
from moneycookie.services import section_service

router = APIRouter()


@router.get("/", response_model=list[SectionResponse])
async def get_sections(
    owner: Annotated[str, Query(min_length=1, max_length=50)],
    db: DBSession,
) -> list[Section]:
    """
    Get every section of an owner.

    Args:
        owner: Owner identifier
        db: Database session

    Returns:
        Sections with holdings, evaluations and total ratings
    """
    return await section_service.get_sections_by_owner(db, owner)


@router.post("/", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def create_section(request: Request, section_in: SectionCreate, db: DBSession) -> Section:
    """
    Create a section, optionally with an initial batch of holdings.

    Every holding is evaluated at its instrument's latest stored price and
    the section's total rating is written in the same transaction.

    Raises:
        ValidationError: 400 on a non-positive quantity or price
        NotFoundError: 404 if an instrument is unlisted or has no prices
    """
    return await section_service.create_section(
        db,
        owner=section_in.owner,
        title=section_in.title,
        initial_holdings=section_in.holdings,
    )


@router.get("/{section_id}", response_model=SectionResponse)
async def get_section(section_id: UUID, db: DBSession) -> Section:
    """Get one section with its holdings and total rating."""
    return await section_service.get_section(db, section_id)


@router.patch("/{section_id}", response_model=SectionResponse)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def update_section(
    request: Request,
    section_id: UUID,
    section_update: SectionUpdate,
    db: DBSession,
) -> Section:
    """
    Rename a section and/or apply an ordered batch of holding changes.

    Each batch item is tagged with an ``intent`` of insert, update or delete.
    The whole request succeeds or fails as one unit.

    Raises:
        NotFoundError: 404 for an unknown section, holding or instrument
        ConflictError: 409 if one holding is named twice in the batch
    """
    return await section_service.update_section(
        db,
        section_id,
        title=section_update.title,
        holding_changes=section_update.holding_changes,
    )


@router.post("/{section_id}/refresh", response_model=SectionResponse)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def refresh_section(request: Request, section_id: UUID, db: DBSession) -> Section:
    """Re-evaluate a section's holdings at the latest stored prices."""
    return await section_service.refresh_section(db, section_id)


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def delete_section(request: Request, section_id: UUID, db: DBSession) -> None:
    """Delete a section with all of its holdings, evaluations and rating."""
    await section_service.delete_section(db, section_id)
