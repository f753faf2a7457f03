"""Centralized exception handlers for the FastAPI application.

Auth exceptions are mapped to HTTP status codes in one place. Every error
body has the same shape as a successful service response:

    {
        "success": false,
        "message": "Human-readable error message"
    }

Usage:
    from loginapp.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loginapp_auth import (
    AuthError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    ServiceFailureError,
    TokenExpiredError,
    ValidationError,
)
from loginapp_identity.domain.user import EmailAlreadyExistsError
from loginapp_identity.exceptions import ResetTokenInvalidError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
INVALID_REQUEST_MESSAGE = "Invalid request body"

# Checked in order; subclasses must precede their bases
EXCEPTION_TO_STATUS: tuple[tuple[type[AuthError], int], ...] = (
    # 400 Bad Request - validation and reset token errors
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ResetTokenInvalidError, status.HTTP_400_BAD_REQUEST),
    # 401 Unauthorized - credentials and session tokens
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (InvalidTokenError, status.HTTP_401_UNAUTHORIZED),
    (TokenExpiredError, status.HTTP_401_UNAUTHORIZED),
    # 409 Conflict - already exists
    (EmailAlreadyExistsError, status.HTTP_409_CONFLICT),
    # 500 Internal Server Error
    (HashingError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ServiceFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def get_status_for_exception(exc: AuthError) -> int:
    for exc_type, status_code in EXCEPTION_TO_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle auth exceptions with their fixed, user-safe message."""
        status_code = get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Auth failure on %s %s: %s",
                request.method,
                request.url.path,
                type(exc).__name__,
            )
            return _create_error_response(status_code, exc.message)

        logger.info(
            "Auth error on %s %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed JSON or wrongly typed fields."""
        logger.info(
            "Malformed request on %s %s: %d errors",
            request.method,
            request.url.path,
            len(exc.errors()),
        )
        return _create_error_response(
            status.HTTP_400_BAD_REQUEST,
            INVALID_REQUEST_MESSAGE,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for anything the services did not translate.

        Logs the full traceback and returns a generic message.
        """
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
        )
