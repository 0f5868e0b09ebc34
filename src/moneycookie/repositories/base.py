"""Generic async repository shared by every portfolio table.

Writes are flushed so generated ids and server defaults are visible to the
caller, but nothing here commits. Sections, holdings, evaluations and total
ratings are written together inside one ``transactional()`` block owned by
the service layer.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

FieldValues = BaseModel | dict[str, Any]


def _as_columns(values: FieldValues) -> dict[str, Any]:
    # Pydantic input only carries the fields the caller actually set
    if isinstance(values, BaseModel):
        return values.model_dump(exclude_unset=True)
    return dict(values)


class BaseRepository(Generic[ModelType]):
    """Primary-key CRUD for a single mapped model.

    >>> repo = SectionRepository(Section, db)
    >>> section = await repo.get(section_id)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> ModelType | None:
        """Return the row with this primary key, or None."""
        stmt = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def get_multi(self, *, skip: int = 0, limit: int = 100) -> list[ModelType]:
        stmt = select(self.model).offset(skip).limit(limit)
        return list((await self.db.scalars(stmt)).all())

    async def create(self, *, obj_in: FieldValues) -> ModelType:
        """Insert a row built from a validated record or a plain mapping.

        The row is flushed and refreshed, so its id and timestamps can be
        read before the surrounding transaction commits.
        """
        row = self.model(**_as_columns(obj_in))
        self.db.add(row)
        await self._flush_and_refresh(row)
        return row

    async def update(self, *, db_obj: ModelType, obj_in: FieldValues) -> ModelType:
        """Assign the given fields onto ``db_obj``; omitted fields keep their values."""
        for column, value in _as_columns(obj_in).items():
            setattr(db_obj, column, value)
        await self._flush_and_refresh(db_obj)
        return db_obj

    async def delete(self, *, id: Any) -> ModelType:
        """Delete by primary key.

        Raises:
            ValueError: no row has this id
        """
        row = await self.get(id)
        if row is None:
            raise ValueError(f"{self.model.__name__} {id} does not exist")
        await self.db.delete(row)
        await self.db.flush()
        return row

    async def exists(self, id: Any) -> bool:
        return await self.get(id) is not None

    async def _flush_and_refresh(self, row: ModelType) -> None:
        await self.db.flush()
        await self.db.refresh(row)
