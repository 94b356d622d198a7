"""Exceptions for the Conversations feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import (
    ChatDeskException,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation is not found."""

    def __init__(self, conversation_id: str):
        super().__init__(
            "Conversation",
            conversation_id,
            "CONVERSATION_NOT_FOUND",
            {"conversation_id": conversation_id},
        )


class ConversationAccessDeniedError(PermissionDeniedError):
    """Raised when a non-attendant reads a conversation they are not part of."""

    def __init__(self, conversation_id: str, user_id: str):
        super().__init__(
            "Access denied",
            {"conversation_id": conversation_id, "user_id": user_id},
            "CONVERSATION_ACCESS_DENIED",
        )


class ConversationValidationError(ValidationError):
    """Raised when a referenced channel or participant is unusable."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, "CONVERSATION_VALIDATION_ERROR")


class ProtocolCollisionError(ChatDeskException):
    """A generated protocol is already taken. Recovered by regeneration."""

    def __init__(self, protocol: str):
        super().__init__(
            f"Protocol '{protocol}' already exists",
            "PROTOCOL_COLLISION",
            {"protocol": protocol},
        )


class ProtocolExhaustedError(ChatDeskException):
    """Raised when every attempt to find a free protocol collided."""

    def __init__(self, attempts: int):
        super().__init__(
            f"Failed to generate unique protocol after {attempts} attempts",
            "PROTOCOL_EXHAUSTED",
            {"attempts": attempts},
        )
        self.attempts = attempts
