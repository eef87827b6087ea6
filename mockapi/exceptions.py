"""
MockAPI — Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the store and routes; caught by global handlers.

Exception Hierarchy:
    MockAPIError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    └── StoreUnavailableError    → 503 Service Unavailable

The query engine raises none of these: it is total over any list of
records and falls back to defaults for unknown parameters.
"""

from typing import Any, Dict, Optional


class MockAPIError(Exception):
    """
    Base exception for all MockAPI application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MockAPIError):
    """
    Raised when a write payload cannot be applied.

    When:    Inserting a record whose id already exists in the collection.
    HTTP:    400 Bad Request
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


class NotFoundError(MockAPIError):
    """
    Raised when a requested collection or record does not exist.

    When:    GET /api/movies/999, GET /api/unknown, or an unmatched route.
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


class StoreUnavailableError(MockAPIError):
    """
    Raised when the collection store could not be loaded.

    What:    The data file was missing or malformed at startup, so there is
             no collection to serve. The query engine is never invoked.
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "The data store is not loaded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
