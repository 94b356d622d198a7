"""DTOs for the Users feature."""
from typing import List, Optional

from pydantic import Field, field_validator

from api.shared.dtos import BaseDTO
from api.features.users.models import UserModel


class UserCreateRequest(BaseDTO):
    """Request DTO for registering an attendant or a client."""

    username: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("username", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class UserUpdateRequest(BaseDTO):
    """Request DTO for partial user updates."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=150)
    password: Optional[str] = Field(default=None, min_length=6)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("username", "password", "name")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("username", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()


class UserListResponse(BaseDTO):
    items: List[UserModel] = Field(description="Users")
    total: int = Field(description="Number of users")
