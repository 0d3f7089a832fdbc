"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses (SRP, OCP for adding new handlers).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import UploadServiceException

logger = logging.getLogger(__name__)

# Map error_code to HTTP status; unknown codes are server errors
_ERROR_CODE_STATUS: dict[str, int] = {
    "MALFORMED_REQUEST": 400,
    "DOCUMENT_NOT_FOUND": 404,
    "STORAGE_NOT_FOUND": 404,
    "DUPLICATE_DOCUMENT": 500,
    "STORAGE_WRITE_ERROR": 500,
    "STORAGE_READ_ERROR": 500,
    "STORAGE_DELETE_ERROR": 500,
    "STORAGE_PERMISSION_ERROR": 500,
    "METADATA_STORE_ERROR": 500,
    "DATABASE_UNAVAILABLE": 500,
}

_INTERNAL_ERROR_MESSAGE = "Internal server error"


def _is_debug(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings is not None and settings.debug)


def _upload_service_exception_handler(
    request: Request, exc: UploadServiceException
) -> JSONResponse:
    """Return JSON from UploadServiceException.to_dict() with mapped status code.

    Server-side failures are logged with the traceback and answered with a
    generic message; details (paths, driver errors) stay in the log.
    """
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    if status >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
        )
        message = exc.message if _is_debug(request) else _INTERNAL_ERROR_MESSAGE
        return JSONResponse(
            status_code=status,
            content={"error": exc.error_code, "message": message},
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with validation error details."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "MALFORMED_REQUEST",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the raw input (may hold upload bytes)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if _is_debug(request) else _INTERNAL_ERROR_MESSAGE
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: UploadServiceException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(UploadServiceException, _upload_service_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
