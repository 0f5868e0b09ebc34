"""Section repository for section-specific database operations."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from moneycookie.models.holding import Holding
from moneycookie.models.section import Section
from moneycookie.repositories.base import BaseRepository


def _with_details():
    """Loader options for a section with holdings, evaluations and rating."""
    return (
        selectinload(Section.holdings).selectinload(Holding.evaluation),
        selectinload(Section.total_rating),
    )


class SectionRepository(BaseRepository[Section]):
    """Repository for Section model with owner lookups and row locking.

    Example:
        >>> repo = SectionRepository(Section, db)
        >>> sections = await repo.get_by_owner("cookie")
    """

    async def get_by_owner(self, owner: str) -> list[Section]:
        """Get all sections of an owner, oldest first, with details loaded.

        Args:
            owner: Owner identifier

        Returns:
            List of sections with holdings, evaluations and total rating
        """
        result = await self.db.execute(
            select(Section)
            .options(*_with_details())
            .where(Section.owner == owner)
            .order_by(Section.create_date.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_with_details(self, section_id: UUID) -> Section | None:
        """Get a section with holdings, evaluations and total rating loaded.

        Uses ``populate_existing`` so that a section already present in the
        session reflects rows written earlier in the same unit of work.

        Args:
            section_id: Section ID

        Returns:
            Section if found, None otherwise
        """
        result = await self.db.execute(
            select(Section)
            .options(*_with_details())
            .where(Section.id == section_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, section_id: UUID) -> Section | None:
        """Get a section and lock its row until the transaction ends.

        Concurrent batches against the same section serialize here;
        batches against different sections never contend.

        Args:
            section_id: Section ID

        Returns:
            Locked section if found, None otherwise
        """
        result = await self.db.execute(
            select(Section).where(Section.id == section_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def delete_by_id(self, section_id: UUID) -> int:
        """Delete the section row itself.

        Args:
            section_id: Section ID

        Returns:
            Number of rows deleted

        Note:
            Holdings, evaluations and the total rating must already be gone.
        """
        result = await self.db.execute(delete(Section).where(Section.id == section_id))
        await self.db.flush()
        return result.rowcount  # type: ignore
