"""Liveness and dependency probes."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneycookie.core.cache import get_cache_stats
from moneycookie.core.deps import DBSession

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    return {"status": "healthy"}


@router.get("/health/db")
async def database_health(db: DBSession):
    """Round-trip a trivial query to the portfolio database."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Portfolio database unreachable: {e}")
        return {"status": "unhealthy", "database": str(e)}
    return {"status": "healthy", "database": "connected"}


@router.get("/health/cache")
async def cache_health():
    """Report whether Yahoo Finance responses are cached in Redis."""
    stats = get_cache_stats()
    return {"status": "healthy" if stats.get("enabled") else "disabled", "cache": stats}
