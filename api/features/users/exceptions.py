"""Exceptions for the Users feature."""
from api.shared.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found (or has another role)."""

    def __init__(self, user_id: str, role: str = "user"):
        super().__init__(
            role.capitalize(), user_id, "USER_NOT_FOUND", {"user_id": user_id, "role": role}
        )


class UsernameTakenError(ConflictError):
    """Raised when trying to register a username that already exists."""

    def __init__(self, username: str):
        message = f"Username '{username}' already exists"
        super().__init__(message, {"username": username}, "USERNAME_TAKEN")


class SelfDeletionError(ValidationError):
    """Raised when an attendant tries to delete their own account."""

    def __init__(self, user_id: str):
        super().__init__(
            "You cannot delete your own account", {"user_id": user_id}, "SELF_DELETION"
        )
