"""
Exception types and handlers that render every failure as {"error": ..., "code": ...}.
"""

from typing import Optional
from fastapi import FastAPI
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import JSONResponse
from constants import ErrorCodes
from logging_config import get_logger
from config import config

logger = get_logger("errors")


class APIError(Exception):
    """Base error carrying an HTTP status and an optional machine-readable code."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code


class ValidationFailed(APIError):
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(400, message, code)


class NotFoundError(APIError):
    def __init__(self, message: str = "Not found"):
        super().__init__(404, message)


class ConflictError(APIError):
    def __init__(self, message: str):
        super().__init__(409, message)


class AuthError(APIError):
    """401/403 failures from the admin guard and login."""


def error_body(message: str, code: Optional[str] = None, **extra) -> dict:
    body = {"error": message}
    if code:
        body["code"] = code
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


async def api_error_handler(request: Request, exc: APIError):
    log_fn = logger.warning if exc.status_code < 500 else logger.error
    log_fn(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
        extra={"data": {"code": exc.code}},
    )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.code))


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Request validation failed on {request.url.path}",
        extra={"data": {"errors": exc.errors()}},
    )
    return JSONResponse(
        status_code=400,
        content=error_body(
            "Invalid request",
            ErrorCodes.VALIDATION_ERROR,
            details=jsonable_encoder(exc.errors()),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    details = None if config.ENV == "production" else str(exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error", details=details))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
