# eshop/core/exception_handlers.py
"""Exception handlers registered by create_app(): validation errors become 422, data access errors a logged 500."""

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from eshop.core.exceptions import EshopError, RecordMappingError

logger = logging.getLogger(__name__)


def _request_label(request: Request) -> str:
    return f"{request.method} {request.url.path}"


def _safe_errors(errors):
    # ctx may carry the raw exception object
    return jsonable_encoder(errors, custom_encoder={Exception: str})


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    logger.info("Rejected request %s: %s", _request_label(request), exc.errors())
    return JSONResponse(status_code=422, content={"detail": _safe_errors(exc.errors())})


async def validation_exception_handler(request: Request, exc: ValidationError):
    """A pydantic model built after request parsing (such as a with_page() copy) failed validation."""
    logger.info("Invalid criteria in %s: %s", _request_label(request), exc.errors())
    return JSONResponse(status_code=422, content={"detail": _safe_errors(exc.errors())})


async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    logger.error("Response validation failed for %s: %s", _request_label(request), exc.errors())
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error: Response validation failed."},
    )


async def record_mapping_exception_handler(request: Request, exc: RecordMappingError):
    """Stored data that does not fit the domain model is a server-side fault."""
    logger.error("Record mapping failed for %s: %s (column=%s, value=%r)",
                 _request_label(request), exc, exc.column, exc.value)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


async def eshop_exception_handler(request: Request, exc: EshopError):
    logger.error("Order search failed for %s: %s", _request_label(request), exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions and log 4xx/5xx errors"""
    if exc.status_code >= 500:
        logger.error("HTTP %d for %s: %s", exc.status_code, _request_label(request), exc.detail)
    elif exc.status_code >= 400:
        logger.info("HTTP %d for %s: %s", exc.status_code, _request_label(request), exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.exception("Unhandled error for %s", _request_label(request), exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
