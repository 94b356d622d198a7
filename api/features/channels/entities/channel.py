"""Channel entity."""
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, String, Text, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity


class ChannelType(str, Enum):
    """Medium a channel delivers messages through."""

    WEB = "web"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"


class Channel(BaseEntity):
    __tablename__ = "channels"
    __table_args__ = (UniqueConstraint("name", name="channels_name_unique"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[ChannelType] = mapped_column(
        SQLEnum(ChannelType, name="channel_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ChannelType.WEB,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
