"""Exceptions for the Uploads feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import NotFoundError, ValidationError


class AvatarValidationError(ValidationError):
    """Raised when an uploaded avatar is rejected."""

    def __init__(
        self, message: str, status_code: int = 400, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details, "AVATAR_VALIDATION_ERROR")
        self.status_code = status_code


class AvatarNotFoundError(NotFoundError):
    def __init__(self, filename: str):
        super().__init__("Avatar", filename, "AVATAR_NOT_FOUND", {"filename": filename})
