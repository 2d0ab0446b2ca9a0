"""
Centralized error handling for API failures.
Constants and reusable helpers so routes stay thin and every error renders as {"error", "code"}.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants: status codes and machine-readable codes
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500

CODE_AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
CODE_INVALID_API_KEY = "INVALID_API_KEY"
CODE_INVALID_REQUEST = "INVALID_REQUEST"
CODE_USER_ID_NOT_ALLOWED = "USER_ID_NOT_ALLOWED"
CODE_INTERNAL_ERROR = "INTERNAL_ERROR"

# Body validators raise PydanticCustomError with these (lowercase) types; the handler keeps them as the code
VALIDATION_ERROR_CODES = {CODE_USER_ID_NOT_ALLOWED}

MSG_AUTHENTICATION_REQUIRED = "Authentication required"
MSG_USER_ID_NOT_ALLOWED = "User ID cannot be provided in request body"


class ApiError(Exception):
    """Error raised by services and routes; rendered by the handler in register_error_handlers."""

    def __init__(self, status_code: int, message: str, code: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code


def unauthorized(message: str = MSG_AUTHENTICATION_REQUIRED, code: str = CODE_AUTHENTICATION_REQUIRED) -> ApiError:
    return ApiError(STATUS_UNAUTHORIZED, message, code)


def invalid_input(message: str, code: str) -> ApiError:
    return ApiError(STATUS_BAD_REQUEST, message, code)


def not_found(message: str, code: str) -> ApiError:
    return ApiError(STATUS_NOT_FOUND, message, code)


def forbidden(message: str, code: str) -> ApiError:
    return ApiError(STATUS_FORBIDDEN, message, code)


def conflict(message: str, code: str) -> ApiError:
    return ApiError(STATUS_CONFLICT, message, code)


def internal_error_from(exc: Exception) -> ApiError:
    """Map an unexpected failure (DB error, bug) to a 500 carrying the exception message."""
    return ApiError(STATUS_INTERNAL_ERROR, f"Internal server error: {exc}", CODE_INTERNAL_ERROR)


def error_body(message: str, code: str) -> dict[str, str]:
    return {"error": message, "code": code}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= STATUS_INTERNAL_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.code))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body") or "request"
        message = f"Invalid {field}: {first.get('msg', 'validation failed')}"
        code = str(first.get("type", "")).upper()
        if code in VALIDATION_ERROR_CODES:
            message = first.get("msg", message)
        else:
            code = CODE_INVALID_REQUEST
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=STATUS_BAD_REQUEST, content=error_body(message, code))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("%s %s crashed: %s", request.method, request.url.path, exc)
        api_error = internal_error_from(exc)
        return JSONResponse(status_code=api_error.status_code, content=error_body(api_error.message, api_error.code))
