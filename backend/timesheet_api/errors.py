"""API error taxonomy and the handlers that render it as ``{"error": ...}``."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status and a public message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class InvalidCredentials(ApiError):
    """Unknown username or wrong password; the two are never told apart."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class AccountDisabled(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Account is disabled"


class DuplicateUser(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username or email already exists"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid token"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class InternalError(ApiError):
    pass


class ConstraintViolation(Exception):
    """Raised by the user store when a unique username/email is violated."""


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on ``app``."""

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
