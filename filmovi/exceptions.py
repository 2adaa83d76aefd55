"""
Filmovi API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios the API knows.
Why:   Custom exceptions map cleanly onto HTTP status codes and let global
       handlers produce one JSON error envelope for every endpoint.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in main.py turn them into responses.
Who:   Raised by the repository and route handlers; caught by global handlers.

Exception Hierarchy:
    FilmoviError (base)     → 500 Internal Server Error
    ├── NotFoundError       → 404 Not Found
    └── DatabaseError       → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class FilmoviError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(FilmoviError):
    """
    Raised when a requested movie does not exist.

    The repository signals a missing row with None/False; the route layer
    converts that into this exception so the 404 body is rendered in one place.
    """

    def __init__(
        self,
        message: str = "Film nije pronađen",
        resource: str = "film",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class DatabaseError(FilmoviError):
    """
    Raised when a database operation fails.

    When:    Connection refused, pool timeout, constraint violation, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The statement,
    constraint name and driver error are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
