"""Evaluation repository."""

from uuid import UUID

from sqlalchemy import delete, select

from moneycookie.models.evaluation import Evaluation
from moneycookie.models.holding import Holding
from moneycookie.repositories.base import BaseRepository


class EvaluationRepository(BaseRepository[Evaluation]):
    """Repository for per-holding evaluations."""

    async def get_by_holding_id(self, holding_id: UUID) -> Evaluation | None:
        """Get the evaluation owned by a holding."""
        result = await self.db.execute(
            select(Evaluation).where(Evaluation.holding_id == holding_id)
        )
        return result.scalar_one_or_none()

    async def delete_by_holding_id(self, holding_id: UUID) -> int:
        """Delete the evaluation owned by a holding."""
        result = await self.db.execute(
            delete(Evaluation).where(Evaluation.holding_id == holding_id)
        )
        await self.db.flush()
        return result.rowcount  # type: ignore

    async def delete_by_section(self, section_id: UUID) -> int:
        """Delete the evaluations of every holding in a section."""
        holding_ids = select(Holding.id).where(Holding.section_id == section_id)
        result = await self.db.execute(
            delete(Evaluation).where(Evaluation.holding_id.in_(holding_ids))
        )
        await self.db.flush()
        return result.rowcount  # type: ignore
