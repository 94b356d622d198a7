"""DTOs for the Conversations feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from api.features.conversations.entities.conversation import (
    Conversation,
    ConversationStatus,
)
from api.features.conversations.entities.message import Message
from api.shared.dtos import BaseDTO


class CreateConversationRequest(BaseDTO):
    """Request DTO for opening a conversation. The protocol is server-assigned."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    channel_id: str = Field(..., min_length=1, description="Channel identifier")
    client_id: str = Field(..., min_length=1, description="Client user identifier")
    attendant_id: str = Field(..., min_length=1, description="Attendant user identifier")
    status: ConversationStatus = Field(default=ConversationStatus.OPEN)


class UpdateConversationRequest(BaseDTO):
    """Partial update. Unknown keys, including `protocol`, are ignored."""

    title: Optional[str] = Field(default=None, max_length=255)
    status: Optional[ConversationStatus] = None
    channel_id: Optional[str] = None
    client_id: Optional[str] = None
    attendant_id: Optional[str] = None

    @field_validator("status", "channel_id", "client_id")
    @classmethod
    def reject_null(cls, v):
        # may be omitted, but not cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ConversationDTO(BaseDTO):
    id: str
    protocol: str
    title: Optional[str] = None
    status: ConversationStatus
    channel_id: str
    client_id: str
    attendant_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: Conversation) -> "ConversationDTO":
        return cls.model_validate(entity)


class ConversationListResponse(BaseDTO):
    items: List[ConversationDTO]
    total: int


class AppendMessageRequest(BaseDTO):
    content: str = Field(..., min_length=1, max_length=10_000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content cannot be empty")
        return v


class MessageDTO(BaseDTO):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: Message) -> "MessageDTO":
        return cls.model_validate(entity)


class MessagesResponse(BaseDTO):
    items: List[MessageDTO]
    total: int
