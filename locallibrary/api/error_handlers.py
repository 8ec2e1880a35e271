"""Error Handlers: global exception handlers rendering the error page.

Invariants:
    - CatalogError -> error page with the error's status (422 malformed id, 404 not found, 503 store)
    - RequestValidationError -> 400 error page with field details
    - Exception (catch-all) -> 500 error page, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CatalogError), validation (FastAPI), catch-all (Exception)
    - Registered from main.py via register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from locallibrary.api.templating import templates
from locallibrary.core.errors import CatalogError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_catalog_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _render_error(request: Request, payload: dict, status_code: int):
    error = payload["error"]
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": error["message"], "message": error["message"], "error": error},
        status_code=status_code,
    )


def _register_catalog_error_handler(app: FastAPI) -> None:
    """Register catalog domain/infrastructure error handler."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        """Handle all catalog domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"CatalogError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return _render_error(request, exc.to_response(), exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _render_error(
            request,
            _build_validation_error_response(exc),
            status.HTTP_400_BAD_REQUEST,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _render_error(
            request,
            {
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error payload."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "status": status.HTTP_400_BAD_REQUEST,
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
