"""User entity for attendants and clients."""
from enum import Enum
from typing import Optional

from sqlalchemy import String, Text, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity


class UserRole(str, Enum):
    """Role of a user account."""

    ATTENDANT = "attendant"
    CLIENT = "client"


class User(BaseEntity):
    """Account that can log in and take part in conversations."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("username", name="users_username_unique"),)

    username: Mapped[str] = mapped_column(String(150), nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.CLIENT,
    )
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500))

    def is_attendant(self) -> bool:
        return self.role == UserRole.ATTENDANT
