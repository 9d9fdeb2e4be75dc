"""
MedMall Back Office - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios the API exposes.
How:   Each exception carries a user-facing message and a context dict.
       Global handlers in main.py map them to HTTP status codes and a
       consistent JSON error body.
Who:   Raised by services and security dependencies; caught by global handlers.

Exception Hierarchy:
    MedMallError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

Request bodies that fail schema validation never reach these classes; FastAPI
answers them with its own 422 response.
"""

from typing import Any, Dict, Optional


class MedMallError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MedMallError):
    """
    Raised when a write is rejected by the data layer's constraints.

    When:    Duplicate unique code, missing required column, broken foreign key.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(MedMallError):
    """
    Raised when the caller presents no bearer token or an unusable one.

    HTTP:    401 Unauthorized (with WWW-Authenticate: Bearer)
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(MedMallError):
    """
    Raised when an authenticated principal lacks the role or permission code
    an endpoint requires.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        permission: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "You do not have access to this resource"
        ctx = context or {}
        if permission:
            message = f"Missing permission '{permission}'"
            ctx["permission"] = permission
        super().__init__(message=message, context=ctx)
        self.permission = permission


class NotFoundError(MedMallError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services turn that None into
    this exception so routes never branch on it.
    HTTP:    404 Not Found
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


class DatabaseError(MedMallError):
    """
    Raised when a database operation fails for reasons the client cannot fix.

    When:    Connection lost mid-query, deadlock, driver failure.
    HTTP:    500 Internal Server Error. The response message is always generic;
             the context is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(MedMallError):
    """
    Raised when a client exceeds the sliding-window request limit.

    HTTP:    429 Too Many Requests (with Retry-After)
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
