"""Error types raised by the API and the handlers that render them."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class UserApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class RequiredFieldsError(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "All fields are required"


class DuplicateEmailError(UserApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "User already exists"


class AuthenticationError(UserApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Access denied"


class InvalidTokenError(UserApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid token"


class UserNotFoundError(UserApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User not found"


class InfrastructureError(UserApiError):
    pass


async def user_api_error_handler(request: Request, exc: UserApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request body on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=RequiredFieldsError.status_code,
        content={"detail": RequiredFieldsError.default_detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserApiError, user_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
