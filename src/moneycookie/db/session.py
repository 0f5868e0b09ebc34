"""Engine, request sessions and the transaction blocks services run inside.

A section mutation touches four tables. ``transactional`` is the single
unit of work for it: either every holding, evaluation and total rating
change lands, or none does.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from moneycookie.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
)

# Rows stay readable after commit so routes can serialise them
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Whatever a route leaves pending is committed when it returns, and
    rolled back if it raises.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()


@asynccontextmanager
async def transactional(db: AsyncSession, *, commit: bool = True) -> AsyncIterator[AsyncSession]:
    """Run the block as one unit of work on ``db``.

    On success the session is committed, unless ``commit=False`` hands the
    commit to the caller. On any exception the session is rolled back and
    the exception propagates unchanged.

        async with transactional(db):
            section = await sections.create(obj_in={...})
            await ratings.create(obj_in={"section_id": section.id, ...})
    """
    try:
        yield db
        if commit:
            await db.commit()
            logger.debug("Committed")
    except Exception as exc:
        await db.rollback()
        logger.error(f"Rolled back after {type(exc).__name__}: {exc}")
        raise


@asynccontextmanager
async def read_only_transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Wrap section and instrument reads; never commits."""
    try:
        yield db
    except Exception as exc:
        logger.error(f"Read failed with {type(exc).__name__}: {exc}")
        raise
