"""Rate limiting for the market data sync endpoints using slowapi.

Catalog and price syncs call external services, so they get a much tighter
limit than the portfolio endpoints.
"""

import logging
import re

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from moneycookie.core.config import settings

logger = logging.getLogger(__name__)

_SECONDS_PER_UNIT = {"second": 1, "minute": 60, "hour": 3600, "day": 86400}
_LIMIT_PATTERN = re.compile(r"(\d+)\s+per\s+(\d+)\s+(second|minute|hour|day)")


def retry_after_seconds(detail: str, default: int = 60) -> int:
    """Derive a Retry-After value from a slowapi limit description.

    Example:
        >>> retry_after_seconds("10 per 1 minute")
        60
    """
    match = _LIMIT_PATTERN.search(detail)
    if match is None:
        return default
    return int(match.group(2)) * _SECONDS_PER_UNIT[match.group(3)]


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Exception handler for requests over their rate limit.

    Args:
        request: The incoming request
        exc: The RateLimitExceeded exception

    Returns:
        429 JSONResponse with ``detail`` and ``retry_after``, plus a Retry-After header
    """
    retry_after = retry_after_seconds(str(exc.detail))
    client_host = request.client.host if request.client else "unknown"
    logger.warning(f"Rate limit exceeded for {client_host} on {request.url.path}: {exc.detail}")

    response = JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded: {exc.detail}",
            "retry_after": retry_after,
        },
    )
    response.headers["Retry-After"] = str(retry_after)
    return response


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],  # each endpoint sets its own limit
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,
)
