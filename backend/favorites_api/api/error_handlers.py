"""Error Handlers - global exception handlers for the Favorites API.

Invariants:
    - FavoritesError → its own http_status with the structured envelope
    - RequestValidationError (bad JSON, missing field, missing query param) → 400
    - Exception (catch-all) → 500 without internal details, with CORS headers
    - register_error_handlers() runs before CORSMiddleware is added

Design Decisions:
    - Three-layer handler: domain (FavoritesError), validation (Pydantic), catch-all (Exception)
    - Storage failures are FavoritesError, so their driver text reaches the client;
      only truly unexpected exceptions are masked
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from favorites_api.core.errors import FavoritesError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_favorites_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_favorites_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FavoritesError)
    async def favorites_error_handler(request: Request, exc: FavoritesError):
        """Handle all Favorites domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"FavoritesError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    # must run inside CORSMiddleware; exception_handler(Exception) runs outside it

    @app.middleware("http")
    async def unhandled_error_middleware(request: Request, call_next):
        """Catch-all, never leaks internal details."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.url.path}: {exc}",
                exc_info=True,
                extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "message": "An unexpected error occurred",
                        "category": "internal",
                        "severity": ErrorSeverity.CRITICAL.value,
                    },
                },
            )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
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
