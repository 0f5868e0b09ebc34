"""Redis-backed requests-cache for the Yahoo Finance traffic behind price sync."""

import logging
from datetime import timedelta
from typing import Any

import requests_cache
from redis import Redis
from redis.exceptions import RedisError
from requests_cache.backends.redis import RedisCache

from moneycookie.core.config import settings

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "moneycookie-prices"

# Daily closes change once per trading day; quote metadata more often
CACHE_EXPIRATION = {
    "daily_data": timedelta(hours=6),
    "quote_data": timedelta(minutes=30),
    "default": timedelta(hours=1),
}

_URL_EXPIRATION = {
    "*/v8/finance/chart/*interval=1d*": CACHE_EXPIRATION["daily_data"],
    "*/v7/finance/quote/*": CACHE_EXPIRATION["quote_data"],
    "*/v10/finance/quoteSummary/*": CACHE_EXPIRATION["quote_data"],
}


def get_redis_connection() -> "Redis[Any] | None":
    """Connect and ping Redis; None when it cannot be reached."""
    try:
        # requests-cache stores pickled responses, so no decoding
        client: Redis[Any] = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=False,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        client.ping()
    except RedisError as e:
        logger.warning(f"Redis at {settings.REDIS_URL} unreachable, price cache off: {e}")
        return None
    logger.info(f"Connected to Redis at {settings.REDIS_URL}")
    return client


def configure_price_cache() -> bool:
    """Patch ``requests`` globally so yfinance responses are cached in Redis.

    Returns False and leaves ``requests`` untouched when Redis is down; price
    sync then simply hits Yahoo every time.
    """
    connection = get_redis_connection()
    if connection is None:
        return False

    requests_cache.install_cache(
        backend=RedisCache(namespace=CACHE_NAMESPACE, connection=connection),
        urls_expire_after=_URL_EXPIRATION,
        expire_after=CACHE_EXPIRATION["default"],
        stale_if_error=True,
    )
    logger.info(f"Price cache installed (daily closes kept {CACHE_EXPIRATION['daily_data']})")
    return True


def get_cache_stats() -> dict[str, Any]:
    """``enabled``, plus ``backend`` and ``size`` when a cache is installed."""
    cache = requests_cache.get_cache()
    if cache is None:
        return {"enabled": False}

    stats: dict[str, Any] = {"enabled": True, "backend": type(cache).__name__}
    try:
        stats["size"] = len(cache.responses)
    except RedisError as e:
        logger.warning(f"Could not read price cache size: {e}")
        stats["size"] = "unavailable"
    return stats
