"""
PuttLog Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three failure classes of the API.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status code.
Who:   Raised by services and the identity dependency; caught by global handlers.

Exception Hierarchy:
    PuttLogError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found (missing OR owned by another caller)
    ├── DatabaseError     → 500 Internal Server Error
    └── ApiError          → client-side: unexpected HTTP status from the API
"""

from typing import Any, Dict, Optional


class PuttLogError(Exception):
    """
    Base exception for all PuttLog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PuttLogError):
    """
    Raised when client input fails validation.

    When:    Empty session name, malformed date, negative counts,
             makes greater than attempts, missing identity header.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "makes cannot exceed attempts",
            "details": {"field": "makes", "attempts": 10, "makes": 11}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PuttLogError):
    """
    Raised when a requested resource does not exist for the caller.

    When:    Unknown session id, a session owned by another caller, or a putt
             record that is not under the given session.
    HTTP:    404 Not Found

    The message only depends on the resource name and id, never on the
    owner, so "missing" and "not yours" produce the same response body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PuttLogError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, driver error.
    HTTP:    500 Internal Server Error

    The client always gets a generic message; the SQL error is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ApiError(PuttLogError):
    """
    Raised by PuttLogClient for failed responses that are not a 400 or 404.

    Carries the HTTP status so callers can surface the failure and let the
    user decide whether to retry.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "The server could not complete the request",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
