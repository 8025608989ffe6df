"""
Aula Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception carries a human-readable message, a machine-readable
       code and an optional context dict. Services wrap them in `Err`
       results; `app.responses` maps them to HTTP status codes in one place.

Exception Hierarchy:
    AulaError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── StoreError        → 500 Internal Server Error
    ├── FileStorageError  → 500 Internal Server Error
    └── NetworkError      → client side (hooks): request failed or non-2xx
"""

from typing import Any, Dict, List, Optional


class AulaError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as `details`
                  for client errors)
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AulaError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, malformed JSON, bad query parameters,
             disallowed upload types or sizes.
    HTTP:    400 Bad Request
    """

    code = "validation_error"

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


class MissingFieldsError(ValidationError):
    """
    Raised when one or more required fields are absent or blank.

    Message format: "materia_id is required" / "materia_id, titulo are required"
    """

    def __init__(self, fields: List[str]):
        verb = "is" if len(fields) == 1 else "are"
        super().__init__(
            message=f"{', '.join(fields)} {verb} required",
            context={"fields": list(fields)},
        )
        self.fields = list(fields)


class NotFoundError(AulaError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/files/{path} for a file that was never stored.
    HTTP:    404 Not Found
    """

    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(AulaError):
    """
    Raised when the relational store rejects or fails a query.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is generic ("Error loading
        tareas"). The driver error goes into `context` and is only logged.
    """

    code = "store_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(AulaError):
    """
    Raised when writing an upload to the storage volume fails.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    code = "file_storage_error"

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NetworkError(AulaError):
    """
    Raised by client hooks when a request cannot be completed.

    When:    Transport failure, undecodable response, or a non-2xx status.
    Attributes:
        status_code: HTTP status of the failed response (None on transport errors)
    """

    code = "network_error"

    def __init__(
        self,
        message: str = "Request failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
