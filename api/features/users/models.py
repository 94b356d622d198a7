"""Models for the Users feature."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from api.features.users.entities.user import User as UserEntity, UserRole


class UserModel(BaseModel):
    """Domain model for User. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="User identifier")
    username: str = Field(description="Login name")
    name: str = Field(description="Display name")
    role: UserRole = Field(description="Account role")
    avatar_url: Optional[str] = Field(default=None, description="Avatar URL")
    created_at: datetime = Field(description="Creation timestamp")

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserModel":
        return cls(
            id=entity.id,
            username=entity.username,
            name=entity.name,
            role=entity.role,
            avatar_url=entity.avatar_url,
            created_at=entity.created_at,
        )

    @property
    def is_attendant(self) -> bool:
        return self.role == UserRole.ATTENDANT


class UserCreateModel(BaseModel):
    """Model for creating a user; `password` is already hashed."""

    username: str
    password: str
    name: str
    role: UserRole
    avatar_url: Optional[str] = None

    def to_entity(self) -> UserEntity:
        return UserEntity(
            username=self.username,
            password=self.password,
            name=self.name,
            role=self.role,
            avatar_url=self.avatar_url,
        )
