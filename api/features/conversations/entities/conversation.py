"""Conversation entity."""
from enum import Enum
from typing import Optional

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity


class ConversationStatus(str, Enum):
    OPEN = "open"
    WAITING = "waiting"
    CLOSED = "closed"


class Conversation(BaseEntity):
    """A support conversation between one client and one attendant."""

    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("protocol", name="conversations_protocol_unique"),
        Index("ix_conversations_updated_at", "updated_at"),
    )

    # Assigned once at creation, never updated
    protocol: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[ConversationStatus] = mapped_column(
        SQLEnum(
            ConversationStatus,
            name="conversation_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ConversationStatus.OPEN,
    )
    channel_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("channels.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    attendant_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True
    )

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.client_id, self.attendant_id)
