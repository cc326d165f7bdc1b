"""Gestion standardisée des erreurs API.

Toutes les erreurs sont renvoyées sous la forme `{"error": message}` avec le statut HTTP
correspondant, qu'elles viennent du domaine (`ReadingError`), de FastAPI ou d'une exception
inattendue.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from reading_proxy.core.http_constants import HTTP_BAD_REQUEST, HTTP_INTERNAL_SERVER_ERROR
from reading_proxy.domain.errors import ReadingError, UnexpectedInternalError

log = structlog.get_logger(__name__)


def create_error_response(status_code: int, message: str) -> JSONResponse:
    """Create the `{"error": message}` response."""
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_reading_error(request: Request, exc: ReadingError) -> JSONResponse:
    """Handle domain errors; they were already logged where raised."""
    return create_error_response(exc.status_code, exc.message)


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException (404, 405...) with the same body shape."""
    log.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        error=str(exc.detail),
    )
    return create_error_response(exc.status_code, str(exc.detail))


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are reported as 400, like the reading endpoint's own checks."""
    log.warning("request_validation_error", path=request.url.path, errors=exc.errors())
    return create_error_response(HTTP_BAD_REQUEST, "Invalid request body.")


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions as UnexpectedInternalError."""
    log.error(
        "unexpected_error",
        path=request.url.path,
        exception_type=type(exc).__name__,
        exc_info=exc,
    )
    return create_error_response(HTTP_INTERNAL_SERVER_ERROR, UnexpectedInternalError().message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReadingError, handle_reading_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_exception)
