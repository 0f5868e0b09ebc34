"""TotalRating repository."""

from uuid import UUID

from sqlalchemy import delete, select

from moneycookie.models.total_rating import TotalRating
from moneycookie.repositories.base import BaseRepository


class TotalRatingRepository(BaseRepository[TotalRating]):
    """Repository for section-level aggregate ratings."""

    async def get_by_section_id(self, section_id: UUID) -> TotalRating | None:
        """Get the total rating owned by a section."""
        result = await self.db.execute(
            select(TotalRating).where(TotalRating.section_id == section_id)
        )
        return result.scalar_one_or_none()

    async def delete_by_section(self, section_id: UUID) -> int:
        """Delete the total rating owned by a section."""
        result = await self.db.execute(
            delete(TotalRating).where(TotalRating.section_id == section_id)
        )
        await self.db.flush()
        return result.rowcount  # type: ignore
