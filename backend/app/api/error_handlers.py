"""Error Handlers — global exception handlers for the TextCards API.

Invariants:
    - CardGenError → {"message", "code"} at exc.http_status
    - RequestValidationError → 400 INVALID_REQUEST with field-level details
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - Raw model text is logged here, once per failure, and never returned
    - Messages localized via Accept-Language when no body locale is known

Design Decisions:
    - Three-layer handler: domain (CardGenError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.config import get_settings
from app.core.domain_types import FailureKind, Locale
from app.core.errors import CardGenError
from app.core.language_strings import get_user_message, parse_accept_language

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_cardgen_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_locale(request: Request) -> Locale:
    return parse_accept_language(
        request.headers.get("accept-language"), get_settings().default_locale,
    )


def _register_cardgen_error_handler(app: FastAPI) -> None:
    """Register card generation error handler."""

    @app.exception_handler(CardGenError)
    async def cardgen_error_handler(request: Request, exc: CardGenError):
        """Handle all domain/infrastructure errors."""
        logger.error(
            f"CardGenError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.context.status_code,
                "raw_text": exc.context.raw_text,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": FailureKind.INVALID_REQUEST.value},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, _request_locale(request)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": get_user_message(
                    FailureKind.INTERNAL_ERROR, _request_locale(request),
                ),
                "code": FailureKind.INTERNAL_ERROR.value,
            },
        )


def _build_validation_error_response(
    exc: RequestValidationError, locale: Locale,
) -> dict:
    """Build structured validation error response."""
    return {
        "message": get_user_message(FailureKind.INVALID_REQUEST, locale),
        "code": FailureKind.INVALID_REQUEST.value,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
