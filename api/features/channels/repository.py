"""Channel repository using base repository pattern."""
from typing import Optional

from api.features.channels.entities.channel import Channel
from api.shared.base import BaseRepository


class ChannelRepository(BaseRepository[Channel]):
    model = Channel

    async def get_by_name(self, name: str) -> Optional[Channel]:
        entities = await self.get_by_field("name", name, limit=1)
        return entities[0] if entities else None
