"""Queries and bulk deletes for holdings, always scoped to a section."""

from uuid import UUID

from sqlalchemy import delete, select

from moneycookie.models.holding import Holding
from moneycookie.repositories.base import BaseRepository


class HoldingRepository(BaseRepository[Holding]):
    async def get_by_section_id(self, section_id: UUID) -> list[Holding]:
        """Every stored holding of the section, oldest purchase first.

        Recomputing a total rating relies on this reading storage, so
        holdings an update batch did not mention are still counted.
        """
        stmt = (
            select(Holding)
            .where(Holding.section_id == section_id)
            .order_by(Holding.buy_date.asc(), Holding.created_at.asc())
        )
        return list((await self.db.scalars(stmt)).all())

    async def get_by_id_and_section(self, holding_id: UUID, section_id: UUID) -> Holding | None:
        """None when the holding is missing or belongs to another section."""
        stmt = select(Holding).where(Holding.id == holding_id, Holding.section_id == section_id)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def delete_by_id(self, holding_id: UUID) -> int:
        # The holding's evaluation must already be gone
        result = await self.db.execute(delete(Holding).where(Holding.id == holding_id))
        await self.db.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_section(self, section_id: UUID) -> int:
        result = await self.db.execute(delete(Holding).where(Holding.section_id == section_id))
        await self.db.flush()
        return result.rowcount  # type: ignore[attr-defined]
