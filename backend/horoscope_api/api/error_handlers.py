"""Error Handlers — map every failure on the horoscope routes to one JSON envelope.

Invariants:
    - Every error body is {"error": {code, message, category, severity, timestamp, context}}
    - Request validation failures are 400 VALIDATION_ERROR plus per-field details
    - Unexpected exceptions are 500 INTERNAL_ERROR; driver text never reaches the client

Design Decisions:
    - All three envelopes come from HoroscopeError.to_response(), so the shape is
      defined once in core/errors.py
    - Log level follows status: < 500 is a client mistake (WARNING), >= 500 is ours (ERROR)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from horoscope_api.core.errors import (
    ErrorCategory, ErrorSeverity, HoroscopeError, InputValidationError,
)

logger = logging.getLogger(__name__)


class _UnexpectedError(HoroscopeError):
    def __init__(self):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain, request-validation, and catch-all handlers."""
    app.add_exception_handler(HoroscopeError, _handle_horoscope_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)


def _respond(request: Request, exc: HoroscopeError, body: dict | None = None) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=body or exc.to_response())


async def _handle_horoscope_error(request: Request, exc: HoroscopeError) -> JSONResponse:
    return _respond(request, exc)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    error = InputValidationError(
        "Invalid request data", details[0]["field"] if details else "request",
    )
    body = error.to_response()
    body["error"]["details"] = details
    return _respond(request, error, body)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: full traceback to the log, generic envelope to the client."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc!r}",
        exc_info=True, extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    error = _UnexpectedError()
    return JSONResponse(status_code=error.http_status, content=error.to_response())
