"""Map exceptions to the JSON error envelope."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from sjfulfillment.domain.errors import (
    AuthorizationError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_GENERIC_MESSAGE = "Internal server error"


def error_response(
    status_code: int,
    message: str,
    *,
    errors: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=exc.headers)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request", errors=exc.errors()
    )


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc) or "Not found")


async def _authorization_handler(
    request: Request, exc: AuthorizationError
) -> JSONResponse:
    if exc.authenticated:
        return error_response(status.HTTP_403_FORBIDDEN, str(exc))
    return error_response(
        status.HTTP_401_UNAUTHORIZED,
        str(exc),
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, _GENERIC_MESSAGE)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, _GENERIC_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(AuthorizationError, _authorization_handler)
    app.add_exception_handler(UnexpectedError, _unexpected_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


__all__ = ["error_response", "register_exception_handlers"]
