"""Mapping of application errors to HTTP responses.

Every error renders as ``{"error": <title>, "message": <text>}``. Errors are
fatal to the request only; the process keeps serving.

Handled errors mark the request transaction failed so nothing the request
wrote before the error is committed.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from reviewbot.adapter.error import OAuthError
from reviewbot.domain.error import (
    AuthenticationFailure,
    DomainError,
    DuplicateIdentityError,
    MissingEmailError,
    NotFoundError,
    ValidationError,
)
from reviewbot.persistence.transaction import RequestTransaction

logger = logging.getLogger(__name__)

# (status code, title) per error type; first match wins
_DOMAIN_ERRORS: list[tuple[type[DomainError], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation failed"),
    (MissingEmailError, status.HTTP_400_BAD_REQUEST, "Missing email"),
    (AuthenticationFailure, status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Not found"),
    (DuplicateIdentityError, status.HTTP_409_CONFLICT, "User already exists"),
]

_INTERNAL_MESSAGE = "An unexpected error occurred"


def error_body(error: str, message: str) -> dict[str, str]:
    """Uniform error payload."""
    return {"error": error, "message": message}


async def _fail_transaction(request: Request, exc: Exception) -> None:
    container = getattr(request.state, "dishka_container", None)
    if container is not None:
        transaction = await container.get(RequestTransaction)
        transaction.mark_failed(exc)


async def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    await _fail_transaction(request, exc)
    for error_type, status_code, title in _DOMAIN_ERRORS:
        if isinstance(exc, error_type):
            return JSONResponse(
                status_code=status_code, content=error_body(title, str(exc))
            )

    # Store outages and any unmapped domain error
    logger.error(f"Unhandled domain error on {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", _INTERNAL_MESSAGE),
    )


async def _oauth_error_handler(request: Request, exc: OAuthError) -> JSONResponse:
    await _fail_transaction(request, exc)
    logger.warning(f"OAuth provider error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_body("Authentication failed", "OAuth provider error"),
    )


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    await _fail_transaction(request, exc)
    # Full detail stays in the logs; clients get a generic message
    logger.exception(f"Store error on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", _INTERNAL_MESSAGE),
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", _INTERNAL_MESSAGE),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(OAuthError, _oauth_error_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
