"""Service layer for the Channels feature."""
from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.channels.dtos import ChannelCreateRequest, ChannelDTO
from api.features.channels.entities.channel import Channel, ChannelType
from api.features.channels.exceptions import ChannelAlreadyExistsError
from api.features.channels.repository import ChannelRepository

logger = structlog.get_logger("chatdesk.channels.service")


class ChannelService:
    async def list_channels(self, *, db_session: AsyncSession) -> List[ChannelDTO]:
        repository = ChannelRepository(db_session)
        entities, _ = await repository.list(0, None, order_by="created_at")
        return [ChannelDTO.from_entity(entity) for entity in entities]

    async def get_channel(
        self, channel_id: str, *, db_session: AsyncSession
    ) -> Optional[ChannelDTO]:
        repository = ChannelRepository(db_session)
        entity = await repository.get_by_id(channel_id)
        return ChannelDTO.from_entity(entity) if entity else None

    async def create_channel(
        self, request: ChannelCreateRequest, *, db_session: AsyncSession
    ) -> ChannelDTO:
        repository = ChannelRepository(db_session)
        if await repository.get_by_name(request.name):
            raise ChannelAlreadyExistsError(request.name)

        entity = await repository.create(
            Channel(
                name=request.name,
                description=request.description,
                type=request.type,
                is_active=request.is_active,
            )
        )
        await db_session.commit()
        logger.info("channel.created", channel_id=entity.id, type=entity.type.value)
        return ChannelDTO.from_entity(entity)

    async def ensure_channel(
        self,
        name: str,
        description: str,
        channel_type: ChannelType,
        *,
        db_session: AsyncSession,
    ) -> bool:
        """Create the named channel when missing. Returns True when created."""
        repository = ChannelRepository(db_session)
        if await repository.get_by_name(name):
            return False
        await repository.create(
            Channel(name=name, description=description, type=channel_type, is_active=True)
        )
        await db_session.commit()
        return True
