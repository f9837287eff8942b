"""Exception → HTTP response mapping for errors that escape route handlers."""

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

from coverwise.config import settings
from coverwise.services.recommendation.domain import InvalidProfile

logger = logging.getLogger(__name__)


def _error_body(request: Request, status: int, message: str, details=None) -> dict:
    body = {
        "detail": message,
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }
    if details is not None:
        body["details"] = details
    request_id = request.headers.get("x-request-id")
    if request_id:
        body["requestId"] = request_id
    return body


async def invalid_profile_handler(request: Request, exc: InvalidProfile):
    logger.warning(f"Invalid profile on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content=_error_body(request, 400, "Validation Error", [{"field": exc.field, "message": exc.message}]),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content=_error_body(request, 409, "Duplicate entry", "This record already exists"),
    )


async def operational_error_handler(request: Request, exc: OperationalError):
    logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=503,
        content=_error_body(request, 503, "Service temporarily unavailable", "Database connection failed"),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = _error_body(request, 500, "Internal Server Error")
    if settings.is_development:
        body["error"] = str(exc)
        body["stack"] = traceback.format_exception(exc)
    return JSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidProfile, invalid_profile_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(OperationalError, operational_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
