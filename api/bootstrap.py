"""Startup seed data: the default test attendant and the default web channel."""
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.channels.entities.channel import ChannelType
from api.features.channels.service import ChannelService
from api.features.users.entities.user import UserRole
from api.features.users.service import UserService
from core.settings import Settings

logger = structlog.get_logger("chatdesk.bootstrap")


async def seed_defaults(
    session: AsyncSession,
    settings: Settings,
    user_service: UserService,
    channel_service: ChannelService,
) -> None:
    seed = settings.SEED

    if seed.SEED_TEST_USER and settings.APP.ENVIRONMENT != "prod":
        created = await user_service.ensure_user(
            username=seed.TEST_USERNAME,
            password=seed.TEST_PASSWORD.get_secret_value(),
            name=seed.TEST_NAME,
            role=UserRole.ATTENDANT,
            db_session=session,
        )
        if created:
            logger.info("seed.test_user.created", username=seed.TEST_USERNAME)

    created = await channel_service.ensure_channel(
        seed.DEFAULT_CHANNEL_NAME,
        seed.DEFAULT_CHANNEL_DESCRIPTION,
        ChannelType.WEB,
        db_session=session,
    )
    if created:
        logger.info("seed.channel.created", name=seed.DEFAULT_CHANNEL_NAME)
