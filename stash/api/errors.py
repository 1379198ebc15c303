"""API error envelope.

Every failure leaves the gateway as ``{"error": <message>, "code": <CODE>}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

UNAUTHORIZED = "UNAUTHORIZED"
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
DB_ERROR = "DB_ERROR"
STORAGE_ERROR = "STORAGE_ERROR"


class ApiError(Exception):
    """An error with a status code and machine-readable code."""

    def __init__(self, status_code: int, message: str, code: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code


def unauthorized() -> ApiError:
    return ApiError(401, "Unauthorized", UNAUTHORIZED)


def not_found() -> ApiError:
    return ApiError(404, "Not found", NOT_FOUND)


def validation_error(message: str) -> ApiError:
    return ApiError(400, message, VALIDATION_ERROR)


def first_error_message(errors: list[dict]) -> str:
    """Human message for the first failing field.

    Messages raised from our own validators are returned verbatim, without
    pydantic's "Value error, " prefix.
    """
    if not errors:
        return "Validation failed"
    err = errors[0]
    ctx_error = (err.get("ctx") or {}).get("error")
    if isinstance(ctx_error, Exception):
        return str(ctx_error)
    msg = err.get("msg") or "Validation failed"
    return msg.removeprefix("Value error, ")


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": code})


async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.status_code, exc.message, exc.code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Return 400 with the first validation message."""
    return error_response(400, first_error_message(exc.errors()), VALIDATION_ERROR)


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Database error", DB_ERROR)
