from sqlalchemy import func, select

from api.bootstrap import seed_defaults
from api.features.auth.security import verify_password
from api.features.channels.entities.channel import Channel
from api.features.channels.service import ChannelService
from api.features.users.entities.user import User, UserRole
from api.features.users.service import UserService
from core.settings import AppSettings, SeedSettings, Settings


def make_settings(environment="local"):
    return Settings(
        APP=AppSettings(ENVIRONMENT=environment),
        SEED=SeedSettings(
            SEED_TEST_USER=True, TEST_USERNAME="teste", TEST_PASSWORD="senha123"
        ),
    )


async def count(session, model):
    return (await session.execute(select(func.count(model.id)))).scalar()


async def test_seeds_test_attendant_and_web_channel(db_session):
    settings = make_settings()

    await seed_defaults(db_session, settings, UserService(), ChannelService())

    user = (await db_session.execute(select(User))).scalar_one()
    assert user.username == "teste"
    assert user.role == UserRole.ATTENDANT
    assert verify_password("senha123", user.password)
    channel = (await db_session.execute(select(Channel))).scalar_one()
    assert channel.name == "web"
    assert channel.is_active


async def test_seeding_is_idempotent(db_session):
    settings = make_settings()

    await seed_defaults(db_session, settings, UserService(), ChannelService())
    await seed_defaults(db_session, settings, UserService(), ChannelService())

    assert await count(db_session, User) == 1
    assert await count(db_session, Channel) == 1


async def test_no_test_user_in_production(db_session):
    settings = make_settings("prod")

    await seed_defaults(db_session, settings, UserService(), ChannelService())

    assert await count(db_session, User) == 0
    assert await count(db_session, Channel) == 1
