"""
Contactbook API — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the request-handling failures.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the wire-level error bodies with the configured status codes.
Who:   Raised by the service layer and routes; caught by global handlers.

Exception Hierarchy:
    ContactbookError (base)
    ├── InvalidPayloadError     → {"error": "invalid payload"}   200 / 400 strict
    ├── InvalidIdentifierError  → {"error": "invalid id"}        200 / 400 strict
    ├── NotFoundError           → {"error": "data not found"}    404
    └── ResponseEncodingError   → "error: <msg>" (text)          500

The `message` of each client-facing error is exactly the string placed in the
"error" field of the response body; debugging detail goes to `context` and is
only ever logged.
"""

from typing import Any, Dict, Optional


class ContactbookError(Exception):
    """
    Base exception for all Contactbook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidPayloadError(ContactbookError):
    """
    Raised when a request body cannot be decoded into a contact.

    When:    Empty body, malformed JSON, a non-object document, a field of the
             wrong JSON type, or a body that could not be read in time.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="invalid payload", context=context)


class InvalidIdentifierError(ContactbookError):
    """
    Raised when a contact id path segment is not a 64-bit integer.

    Attributes:
        raw_id: The path segment exactly as received.
    """

    def __init__(self, raw_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="invalid id", context=ctx)
        self.raw_id = raw_id


class NotFoundError(ContactbookError):
    """
    Raised when no contact in the store carries the requested id.

    HTTP:    404 Not Found (in every status mode)
    """

    def __init__(self, contact_id: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["contact_id"] = contact_id
        super().__init__(message="data not found", context=ctx)
        self.contact_id = contact_id


class ResponseEncodingError(ContactbookError):
    """
    Raised when a success payload cannot be serialized to JSON.

    Practically unreachable for contact payloads. The handler answers 500 with
    a plain-text "error: <msg>" body; the status is decided before any part of
    the body is written.
    """

    def __init__(self, detail: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=f"error: {detail}", context=context)
        self.detail = detail
