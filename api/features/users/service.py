"""Service layer for the Users feature."""
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.security import hash_password
from api.features.users.dtos import UserCreateRequest, UserUpdateRequest
from api.features.users.entities.user import UserRole
from api.features.users.exceptions import (
    SelfDeletionError,
    UserNotFoundError,
    UsernameTakenError,
)
from api.features.users.models import UserCreateModel, UserModel
from api.features.users.repository import UserRepository
from api.shared.exceptions import DatabaseError
from infra.db_utils import unique_violation_field

logger = structlog.get_logger("chatdesk.users.service")


class UserService:
    """Service for attendant and client accounts."""

    async def get_user(
        self, user_id: str, *, db_session: AsyncSession
    ) -> Optional[UserModel]:
        repository = UserRepository(db_session)
        entity = await repository.get_by_id(user_id)
        return UserModel.from_entity(entity) if entity else None

    async def list_users(
        self, role: Optional[UserRole] = None, *, db_session: AsyncSession
    ) -> List[UserModel]:
        repository = UserRepository(db_session)
        if role is None:
            entities, _ = await repository.list(0, None, order_by="created_at")
        else:
            entities = await repository.get_by_role(role)
        return [UserModel.from_entity(entity) for entity in entities]

    async def create_user(
        self,
        request: UserCreateRequest,
        role: UserRole,
        *,
        db_session: AsyncSession,
    ) -> UserModel:
        """Register a user with a hashed password."""
        repository = UserRepository(db_session)

        if await repository.get_by_username(request.username):
            raise UsernameTakenError(request.username)

        create_model = UserCreateModel(
            username=request.username,
            password=hash_password(request.password),
            name=request.name,
            role=role,
            avatar_url=request.avatar_url,
        )
        try:
            entity = await repository.create(create_model.to_entity())
            await db_session.commit()
        except IntegrityError as e:
            await db_session.rollback()
            if unique_violation_field(e) == "username":
                raise UsernameTakenError(request.username) from e
            logger.error("user.create.failed", error=repr(e))
            raise DatabaseError.from_cause("creating user", e) from e

        logger.info("user.created", user_id=entity.id, role=role.value)
        return UserModel.from_entity(entity)

    async def update_user(
        self,
        user_id: str,
        role: UserRole,
        request: UserUpdateRequest,
        *,
        db_session: AsyncSession,
    ) -> UserModel:
        repository = UserRepository(db_session)
        if await repository.get_with_role(user_id, role) is None:
            raise UserNotFoundError(user_id, role.value)

        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("password"):
            update_data["password"] = hash_password(update_data["password"])
        else:
            update_data.pop("password", None)

        if "username" in update_data:
            other = await repository.get_by_username(update_data["username"])
            if other is not None and other.id != user_id:
                raise UsernameTakenError(update_data["username"])

        try:
            entity = await repository.update_by_id(user_id, **update_data)
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            if isinstance(e, IntegrityError) and unique_violation_field(e) == "username":
                raise UsernameTakenError(update_data["username"]) from e
            logger.error("user.update.failed", user_id=user_id, error=repr(e))
            raise DatabaseError.from_cause("updating user", e) from e
        logger.info("user.updated", user_id=user_id, fields=sorted(update_data))
        return UserModel.from_entity(entity)

    async def delete_user(
        self,
        user_id: str,
        role: UserRole,
        *,
        acting_user_id: str,
        db_session: AsyncSession,
    ) -> None:
        if role == UserRole.ATTENDANT and user_id == acting_user_id:
            raise SelfDeletionError(user_id)

        repository = UserRepository(db_session)
        if await repository.get_with_role(user_id, role) is None:
            raise UserNotFoundError(user_id, role.value)

        await repository.delete(user_id)
        await db_session.commit()
        logger.info("user.deleted", user_id=user_id, role=role.value)

    async def ensure_user(
        self,
        *,
        username: str,
        password: str,
        name: str,
        role: UserRole,
        db_session: AsyncSession,
    ) -> bool:
        """Create the account if the username is free. Returns True when created."""
        repository = UserRepository(db_session)
        if await repository.get_by_username(username):
            return False
        await repository.create(
            UserCreateModel(
                username=username,
                password=hash_password(password),
                name=name,
                role=role,
            ).to_entity()
        )
        await db_session.commit()
        return True
