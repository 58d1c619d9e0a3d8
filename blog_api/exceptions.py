"""
Blog API: Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the error scenarios of the post API.
Why:   Each exception carries the HTTP status it maps to, so the single error
       formatter in `middleware.errors` decides the response without any
       per-route try/except.
How:   Each exception class carries a message, a status code and an optional
       context dict (logged, never returned to the client).
Who:   Raised by services and the not-found fallback; caught by global handlers.

Exception Hierarchy:
    BlogApiError (base)          → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

    Anything that is not a BlogApiError is reported as 500 as well.
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        status_code: HTTP status the error formatter responds with
        context:     Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when client input fails validation.

    When:    Missing or empty title/content/category, malformed request body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(BlogApiError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown post id, malformed post id, or a URL no route matches.
    HTTP:    404 Not Found

    A malformed id is reported exactly like a missing one; callers only
    ever deal with one "not found" case.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Resource not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BlogApiError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Connection lost mid-query, database unreachable, constraint violation.
    HTTP:    500 Internal Server Error

    The message is always generic; driver details go into `context` and the
    server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
