"""Controller for the Channels feature."""
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.channels.dtos import (
    ChannelCreateRequest,
    ChannelDTO,
    ChannelListResponse,
)
from api.features.channels.exceptions import ChannelNotFoundError
from api.features.channels.service import ChannelService


class ChannelController:
    def __init__(self, channel_service: ChannelService):
        self.channel_service = channel_service

    async def list_channels(self, *, db_session: AsyncSession) -> ChannelListResponse:
        channels = await self.channel_service.list_channels(db_session=db_session)
        return ChannelListResponse(items=channels, total=len(channels))

    async def get_channel(
        self, channel_id: str, *, db_session: AsyncSession
    ) -> ChannelDTO:
        channel = await self.channel_service.get_channel(channel_id, db_session=db_session)
        if channel is None:
            raise ChannelNotFoundError(channel_id)
        return channel

    async def create_channel(
        self, request: ChannelCreateRequest, *, db_session: AsyncSession
    ) -> ChannelDTO:
        return await self.channel_service.create_channel(request, db_session=db_session)
