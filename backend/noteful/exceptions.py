"""
Noteful Backend: Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    │   └── InvalidIdentifierError → 400 Bad Request (malformed document id)
    ├── AuthenticationError        → 401 Unauthorized
    └── NotFoundError              → 404 Not Found

Store errors that are not rewritten by a service (anything but a duplicate
key) are not part of this hierarchy; they reach the catch-all handler as-is.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 400s)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Missing required field, wrong field type, malformed reference,
             or a natural key (`name`, `username`) that already exists.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing `name` from request body",
            "details": {"field": "name"}
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


class InvalidIdentifierError(ValidationError):
    """
    Raised when a document id is not well-formed.

    Checked before the store is queried, so a malformed id never costs a
    round trip and is reported as 400 rather than 404.
    """

    def __init__(self, field: str = "id", value: Optional[str] = None):
        ctx: Dict[str, Any] = {}
        if value is not None:
            ctx["value"] = value
        super().__init__(message=f"The `{field}` is invalid", field=field, context=ctx)


class AuthenticationError(NotefulError):
    """Raised when a username/password pair does not match. HTTP 401."""

    def __init__(self, message: str = "Incorrect username or password"):
        super().__init__(message=message)


class NotFoundError(NotefulError):
    """
    Raised when a requested document does not exist.

    What:    A well-formed id that matches nothing in its collection.
    HTTP:    404 Not Found

    The store returns None for missing documents; services convert None into
    this exception and the global handler renders the shared 404 body.
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

