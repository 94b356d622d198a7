"""Controller for the Auth feature."""
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.dtos import LoginRequest
from api.features.auth.security import SESSION_USER_KEY
from api.features.auth.service import AuthService
from api.features.users.models import UserModel


class AuthController:
    """Binds authenticated users to the request session."""

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service

    async def login(
        self, request: Request, credentials: LoginRequest, *, db_session: AsyncSession
    ) -> UserModel:
        user = await self.auth_service.authenticate(
            credentials.username, credentials.password, db_session=db_session
        )
        request.session.clear()
        request.session[SESSION_USER_KEY] = user.id
        return user

    async def logout(self, request: Request) -> None:
        request.session.clear()
