# app/middleware.py
"""Request pipeline stages.

``RequestLoggingMiddleware`` wraps the whole app and runs before anything
else. Auth and body validation are route dependencies, so they only run on
the routes that declare them, auth first.
"""
import json
import math
import time
from typing import Any, Awaitable, Callable, Dict

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from .core import is_present
from .errors import BadRequestError, UnauthorizedError


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        logger.info("{} {}", request.method, url)

        start = time.perf_counter()
        # failures are logged by the exception handlers in app/errors.py
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "{} {} -> {} ({:.1f}ms)", request.method, url, response.status_code, duration_ms
        )
        return response


async def require_token(request: Request) -> None:
    settings = request.app.state.settings
    token = request.headers.get(settings.auth_header)
    if not token or token != settings.auth_token:
        raise UnauthorizedError()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"{token} is out of range")
    return value


def _is_json_content(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> Dict[str, Any]:
    # bodies sent with another (or no) content type are not parsed at all
    if not _is_json_content(request.headers.get("content-type", "")):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError:
        raise BadRequestError("Malformed JSON body")
    # only objects carry fields; anything else reads as an empty body
    return body if isinstance(body, dict) else {}


async def validated_body(request: Request) -> Dict[str, Any]:
    body = await read_json_body(request)
    if not is_present(body.get("name")) or not is_present(body.get("price")):
        raise BadRequestError("Name and price are required")
    return body
