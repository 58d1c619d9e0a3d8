"""
Blog API: Error Handling Middleware
======================================

What:  Global exception handlers producing the `{message, stack}` error body.
Why:   One place decides the shape of every error response; route handlers
       and services only raise.
How:   FastAPI's exception_handler registry intercepts each exception type.

Handler hierarchy:
    BlogApiError (and subclasses) → exc.status_code (400 / 404 / 500)
    RequestValidationError        → 400 (malformed JSON, wrong field types)
    StarletteHTTPException 404/405→ 404 "Not Found - <path>" (no route matched)
    StarletteHTTPException other  → its own status code
    Exception (fallback)          → 500, via UnexpectedErrorMiddleware

Stack traces:
    `stack` holds the formatted traceback unless ENVIRONMENT=production,
    where it is always null. Unexpected errors additionally have their
    message replaced by a generic one in production.
"""

import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from blog_api.config import settings
from blog_api.exceptions import BlogApiError, NotFoundError, ValidationError
from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def format_stack(exc: BaseException) -> Optional[str]:
    """Formatted traceback of `exc`, or None in production."""
    if settings.is_production:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(exc: BaseException, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "stack": format_stack(exc)},
    )


def _requested_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Security: only `message` and (outside production) `stack` are returned.
    The `context` of application errors is logged server-side only.
    """

    @app.exception_handler(BlogApiError)
    async def handle_app_error(request: Request, exc: BlogApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(exc, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body could not be parsed into a PostPayload: reported as a ValidationError."""
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        error = ValidationError(message="Invalid request: " + "; ".join(problems))
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), error.message)
        return error_response(exc, error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unmatched routes (and unbound methods on existing paths) become NotFoundError."""
        if exc.status_code in (404, 405):
            request.state.route_missing = True
            error = NotFoundError(message=f"Not Found - {_requested_url(request)}")
            return error_response(error, error.status_code, error.message)
        return error_response(exc, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Last resort for errors raised outside UnexpectedErrorMiddleware
        (for example inside another middleware).
        """
        return unexpected_error_response(exc)


def unexpected_error_response(exc: Exception) -> JSONResponse:
    """
    500 body for truly unexpected errors (store unreachable, bugs).

    The full stack trace is always logged server-side. In production the
    message is replaced by a generic one.
    """
    logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
    message = UNEXPECTED_ERROR_MESSAGE if settings.is_production else (str(exc) or UNEXPECTED_ERROR_MESSAGE)
    return error_response(exc, 500, message)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns unhandled exceptions into the 500 error body inside the
    middleware stack.

    Starlette runs `Exception` handlers in ServerErrorMiddleware, outside
    every user middleware, so those responses would miss the CORS and
    request-ID headers and the access log. Mounted innermost, this one
    returns the response before any of them finish.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return unexpected_error_response(exc)
