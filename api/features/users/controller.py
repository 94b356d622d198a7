"""Controller for the Users feature."""
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.dtos import (
    UserCreateRequest,
    UserListResponse,
    UserUpdateRequest,
)
from api.features.users.entities.user import UserRole
from api.features.users.models import UserModel
from api.features.users.service import UserService


class UserController:
    """Controller for attendant and client management."""

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    async def list_users(
        self, role: UserRole | None, *, db_session: AsyncSession
    ) -> UserListResponse:
        users = await self.user_service.list_users(role, db_session=db_session)
        return UserListResponse(items=users, total=len(users))

    async def create_user(
        self, request: UserCreateRequest, role: UserRole, *, db_session: AsyncSession
    ) -> UserModel:
        return await self.user_service.create_user(request, role, db_session=db_session)

    async def update_user(
        self,
        user_id: str,
        role: UserRole,
        request: UserUpdateRequest,
        *,
        db_session: AsyncSession,
    ) -> UserModel:
        return await self.user_service.update_user(
            user_id, role, request, db_session=db_session
        )

    async def delete_user(
        self,
        user_id: str,
        role: UserRole,
        *,
        acting_user: UserModel,
        db_session: AsyncSession,
    ) -> None:
        await self.user_service.delete_user(
            user_id, role, acting_user_id=acting_user.id, db_session=db_session
        )
