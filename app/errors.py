# app/errors.py
"""Error types raised by handlers, and the handlers that turn them into envelopes.

Every failure path ends here: route code raises, the exception handlers
registered by ``register_exception_handlers`` log the message and answer
with ``{"success": false, "message": ...}``.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models import ErrorEnvelope


class ProductError(Exception):
    """Base error carrying the HTTP status to answer with."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    # auth and validation rejections log at WARNING
    log_level: str = "ERROR"

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ProductError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class UnauthorizedError(ProductError):
    status_code = status.HTTP_401_UNAUTHORIZED
    log_level = "WARNING"

    def __init__(self, message: str = "Unauthorized - missing or invalid token"):
        super().__init__(message)


class BadRequestError(ProductError):
    status_code = status.HTTP_400_BAD_REQUEST
    log_level = "WARNING"


def error_response(status_code: int, message: Optional[str]) -> JSONResponse:
    body = ErrorEnvelope(message=message or "Server Error")
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def product_error_handler(request: Request, exc: ProductError) -> JSONResponse:
    if exc.log_level == "ERROR":
        logger.error("ERROR: {}", exc.message)
    else:
        logger.log(exc.log_level, "{} {} rejected: {}", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error("ERROR: {}", exc.detail)
    response = error_response(exc.status_code, str(exc.detail) if exc.detail else None)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    message = str(exc)
    logger.opt(exception=exc).error("ERROR: {}", message or type(exc).__name__)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductError, product_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
