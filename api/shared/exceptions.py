"""Shared exceptions for the ChatDesk API."""
from typing import Any, Dict, Optional


class ChatDeskException(Exception):
    """Base exception for ChatDesk API."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ChatDeskException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code, details)


class NotFoundError(ChatDeskException):
    """Raised when a resource is not found."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} with ID '{identifier}' not found"
        super().__init__(
            message, error_code, details or {"resource": resource, "identifier": identifier}
        )


class ConflictError(ChatDeskException):
    """Raised when there's a conflict with existing data."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "CONFLICT",
    ):
        super().__init__(message, error_code, details)


class AuthenticationError(ChatDeskException):
    """Raised when credentials or a session cannot be verified."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, "NOT_AUTHENTICATED")


class PermissionDeniedError(ChatDeskException):
    """Raised when the current user may not act on a resource."""

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "PERMISSION_DENIED",
    ):
        super().__init__(message, error_code, details)


class StorageError(ChatDeskException):
    """Raised when storage operations fail."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class DatabaseError(ChatDeskException):
    """Raised when the database rejects a write for a non-domain reason.

    The message names the driver error class only; statements and bound
    parameters stay in the logs.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DATABASE_ERROR", details)

    @classmethod
    def from_cause(cls, action: str, cause: BaseException) -> "DatabaseError":
        kind = type(cause).__name__
        return cls(f"{kind} while {action}", {"error": kind})
