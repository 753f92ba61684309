"""
NoteKeeper Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions raised at the HTTP boundary.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by route handlers; caught by global handlers.

The service layer (Validator and NoteStore) never raises these. It returns
`ValidationFailure` / `None` / `False`, and the routes turn those results into
exceptions so that the status code decision lives in exactly one layer.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── NotFoundError     → 404 Not Found
"""

from typing import Any, Dict, List, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

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


class ValidationError(NoteKeeperError):
    """
    Raised when a request payload fails schema validation.

    HTTP:    400 Bad Request

    Carries the complete violation list (never just the first one), so a
    single response tells the client everything that is wrong.

    Example response:
        {
            "success": false,
            "error": "validation_error",
            "message": "Request payload failed validation (2 violations)",
            "details": [
                {"field": "title", "rule": "too_short", "message": "..."},
                {"field": "content", "rule": "required", "message": "..."}
            ],
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        violations: Optional[List[Dict[str, Any]]] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.violations = violations or []
        if message is None:
            count = len(self.violations)
            message = f"Request payload failed validation ({count} violation{'s' if count != 1 else ''})"
        super().__init__(message=message, context=context)


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE/PATCH /notes/{id} with an id that matches no note.
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
        self.resource = resource
        self.resource_id = resource_id
