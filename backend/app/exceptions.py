"""
Task Board Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every failure a handler can report.
How:   Each exception carries a message, an optional context dict and the HTTP
       status it maps to. Global exception handlers (registered in main.py)
       catch these and return structured JSON error responses.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    TaskBoardError (base)
    ├── ValidationError          → 400 Bad Request (missing/malformed input)
    ├── ForbiddenError           → 403 Forbidden (author email mismatch)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (duplicate key on upsert)
    ├── DatabaseError            → 500 Internal Server Error
    └── ServiceUnavailableError  → 503 Service Unavailable (store not connected)
"""

from typing import Any, Dict, List, Optional


class TaskBoardError(Exception):
    """
    Base exception for all Task Board application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged; only ValidationError exposes it)
        status_code: HTTP status the global handler responds with
        code:        Machine-readable error code
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskBoardError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, non-numeric budget, unparseable deadline,
             malformed task identifiers, missing email query parameter.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "title is required",
            "code": "validation_error",
            "details": {"field": "title", "errors": [...]}
        }
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class ForbiddenError(TaskBoardError):
    """
    Raised when the caller-supplied email is not the task's author email.

    HTTP:    403 Forbidden
    Note:    This is a bare string comparison, not authentication.
    """

    status_code = 403
    code = "forbidden"

    def __init__(
        self,
        message: str = "Only the task author can modify this task",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TaskBoardError):
    """
    Raised when a requested resource does not exist.

    When:    GET /tasks/{id} or GET /users/{email} with no matching document.
    HTTP:    404 Not Found
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(TaskBoardError):
    """
    Raised when the store reports a duplicate-key violation.

    When:    A user upsert races the unique index on `email`.
    HTTP:    409 Conflict
    """

    status_code = 409
    code = "conflict"

    def __init__(
        self,
        message: str = "User with this email already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TaskBoardError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Network errors, server errors, or a delete that reports zero
             removed documents although the task still exists.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the underlying
    error type is kept in `context` and logged server-side only.
    """

    status_code = 500
    code = "internal_error"

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceUnavailableError(TaskBoardError):
    """
    Raised when a route needs the store but the startup connection failed.

    HTTP:    503 Service Unavailable
    """

    status_code = 503
    code = "service_unavailable"

    def __init__(
        self,
        message: str = "Database not ready",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
