"""
BizTime Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status code.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    BizTimeError (base)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Every "not found" condition in the service layer, including the payment
status check, is reported through NotFoundError.
Bad input never reaches the services: request bodies and path parameters
are validated by FastAPI and rejected with 400 in main.py.
"""

from typing import Any, Dict, Optional


class BizTimeError(Exception):
    """
    Base exception for all BizTime application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BizTimeError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    SQLAlchemy returns None (or an empty result) for missing rows; services
    convert that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(BizTimeError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    Covers constraint violations (duplicate company code, unknown comp_code)
    as well as connection failures. The client always receives a generic
    message; the underlying error type is kept in `context` for the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
