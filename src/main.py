"""FastAPI application entry point."""

import logging
import logging.config
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from moneycookie.api.routes import health, instruments, sections
from moneycookie.core.cache import configure_price_cache
from moneycookie.core.config import settings
from moneycookie.core.exceptions import AppException, app_exception_handler
from moneycookie.core.middleware import RequestLoggingMiddleware
from moneycookie.core.rate_limit import limiter, rate_limit_exceeded_handler
from moneycookie.db.base import Base
from moneycookie.db.session import engine

logging.config.dictConfig(settings.LOGGING_CONFIG)
logging.getLogger("moneycookie").setLevel(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")

    # Alembic owns the schema outside development
    if settings.ENVIRONMENT == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    configure_price_cache()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=settings.CORS_HEADERS,
)
# Added last, so it wraps everything else
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.include_router(health.router, tags=["health"])
app.include_router(sections.router, prefix="/api/v1/sections", tags=["sections"])
app.include_router(instruments.router, prefix="/api/v1/instruments", tags=["instruments"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
