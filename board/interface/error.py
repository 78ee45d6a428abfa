"""Interface layer errors.

Maps the closed set of domain failures onto HTTP responses. Backend error
details never reach the client; only the domain error message does.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from board.domain.error import (
    AlreadyExistsError,
    ConcurrencyConflictError,
    ContentDeletedError,
    DepthExceededError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

# Most specific first; the first matching class wins
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DepthExceededError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ContentDeletedError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (ConcurrencyConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """Request lacks the identity headers set by the gateway."""

    pass


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate a domain error raised by a route into a JSON response."""
    assert isinstance(exc, DomainError)
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, error=type(exc).__name__
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error=type(exc).__name__,
            detail=str(exc),
        )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def handle_authentication_required(
    request: Request, exc: Exception
) -> JSONResponse:
    """Reject requests without an actor identity."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc), "error": "AuthenticationRequired"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers on the application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(
        AuthenticationRequiredError, handle_authentication_required
    )
