"""Translate domain failures into HTTP responses.

| Failure                  | Status |
|--------------------------|--------|
| ObjectNotFoundError      | 404    |
| ValidationError          | 422    |
| InvalidOperationError    | 409    |
| ServiceUnavailable       | 503    |
| anything else            | 500    |
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.errors import ServiceUnavailable

logger = structlog.get_logger(__name__)


def _detail(exc):
    messages = getattr(exc, "messages", None)
    return messages if messages else str(exc)


def _error_response(status_code, error, exc, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": _detail(exc)},
        headers=headers,
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return _error_response(404, "not_found", exc)


async def invalid_argument_handler(request: Request, exc: ValidationError):
    return _error_response(422, "invalid_argument", exc)


async def invalid_state_handler(request: Request, exc: InvalidOperationError):
    return _error_response(409, "invalid_state", exc)


async def unavailable_handler(request: Request, exc: ServiceUnavailable):
    headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after else None
    return _error_response(503, "unavailable", exc, headers=headers)


async def unknown_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"error": "unknown", "detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, invalid_argument_handler)
    app.add_exception_handler(InvalidOperationError, invalid_state_handler)
    app.add_exception_handler(ServiceUnavailable, unavailable_handler)
    app.add_exception_handler(Exception, unknown_error_handler)
