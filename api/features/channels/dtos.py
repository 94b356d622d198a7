"""DTOs for the Channels feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.features.channels.entities.channel import Channel, ChannelType
from api.shared.dtos import BaseDTO


class ChannelCreateRequest(BaseDTO):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None)
    type: ChannelType = Field(default=ChannelType.WEB)
    is_active: bool = Field(default=True)


class ChannelDTO(BaseDTO):
    id: str
    name: str
    description: Optional[str] = None
    type: ChannelType
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: Channel) -> "ChannelDTO":
        return cls.model_validate(entity)


class ChannelListResponse(BaseDTO):
    items: List[ChannelDTO]
    total: int
