"""Service layer for the Auth feature."""
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.exceptions import InvalidCredentialsError
from api.features.auth.security import verify_password
from api.features.users.models import UserModel
from api.features.users.repository import UserRepository

logger = structlog.get_logger("chatdesk.auth.service")


class AuthService:
    """Checks credentials against stored bcrypt hashes."""

    async def authenticate(
        self, username: str, password: str, *, db_session: AsyncSession
    ) -> UserModel:
        repository = UserRepository(db_session)
        entity = await repository.get_by_username(username)
        if entity is None or not verify_password(password, entity.password):
            logger.info("auth.login.rejected", username=username)
            raise InvalidCredentialsError()

        logger.info("auth.login.accepted", user_id=entity.id)
        return UserModel.from_entity(entity)
