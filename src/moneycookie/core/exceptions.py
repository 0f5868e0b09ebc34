"""Domain errors for portfolio operations and their JSON rendering.

Every error a section, valuation or market data service can raise derives
from ``AppException`` and carries its own HTTP status and error code. Routes
let them propagate; ``app_exception_handler`` turns them into
``{"detail": ..., "error_code": ...}`` bodies.

    AppException                    500
    ├── ValidationError             400  VALIDATION_ERROR
    │   └── DivisionUndefinedError       DIVISION_UNDEFINED
    ├── NotFoundError               404  NOT_FOUND
    │   ├── SectionNotFoundError         SECTION_NOT_FOUND
    │   ├── HoldingNotFoundError         HOLDING_NOT_FOUND
    │   ├── InstrumentNotFoundError      INSTRUMENT_NOT_FOUND
    │   └── NoPriceHistoryError          NO_PRICE_HISTORY
    ├── ConflictError               409  CONFLICT
    │   └── ConflictingBatchEntryError   CONFLICTING_BATCH_ENTRY
    └── ExternalAPIError            503  EXTERNAL_API_ERROR
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base for every error the API reports to clients.

    Subclasses override the class attributes; an instance may replace
    ``detail`` or ``error_code`` with something more specific.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    error_code: str | None = None

    def __init__(self, detail: str | None = None, *, error_code: str | None = None) -> None:
        cls = type(self)
        self.detail = detail or cls.detail
        self.error_code = error_code or cls.error_code
        super().__init__(self.detail)


class ValidationError(AppException):
    """A quantity, price or other holding field is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation error"
    error_code = "VALIDATION_ERROR"


class DivisionUndefinedError(ValidationError):
    """Per-holding evaluation rate asked for with a zero average price.

    The section-level rate falls back to zero instead of raising this.
    """

    detail = "Evaluation rate is undefined for a zero average price"
    error_code = "DIVISION_UNDEFINED"


class NotFoundError(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"
    error_code = "NOT_FOUND"


class SectionNotFoundError(NotFoundError):
    detail = "Section not found"
    error_code = "SECTION_NOT_FOUND"


class HoldingNotFoundError(NotFoundError):
    """No holding with this id belongs to the section being updated."""

    detail = "Holding not found"
    error_code = "HOLDING_NOT_FOUND"


class InstrumentNotFoundError(NotFoundError):
    """Short code or id is not in the instrument catalog; a catalog sync may fix it."""

    detail = "Instrument not found"
    error_code = "INSTRUMENT_NOT_FOUND"


class NoPriceHistoryError(NotFoundError):
    """Listed instrument with no stored closes yet; a price sync may fix it."""

    detail = "No price history for instrument"
    error_code = "NO_PRICE_HISTORY"


class ConflictError(AppException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"
    error_code = "CONFLICT"


class ConflictingBatchEntryError(ConflictError):
    """One update batch names the same holding more than once."""

    detail = "Holding appears more than once in the batch"
    error_code = "CONFLICTING_BATCH_ENTRY"


class ExternalAPIError(AppException):
    """The catalog feed or Yahoo Finance failed or returned garbage."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "External service unavailable"
    error_code = "EXTERNAL_API_ERROR"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` as JSON with its status code.

    Server-side failures are logged as errors with a traceback, client
    errors as warnings.
    """
    context = {
        "status_code": exc.status_code,
        "error_code": exc.error_code,
        "request_path": request.url.path,
    }
    message = f"{type(exc).__name__}: {exc.detail}"
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(message, exc_info=True, extra=context)
    else:
        logger.warning(message, extra=context)

    body: dict[str, Any] = {"detail": exc.detail}
    if exc.error_code:
        body["error_code"] = exc.error_code
    return JSONResponse(status_code=exc.status_code, content=body)
