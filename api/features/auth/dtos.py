"""DTOs for the Auth feature."""
from pydantic import Field

from api.shared.dtos import BaseDTO


class LoginRequest(BaseDTO):
    """Request DTO for session login."""

    username: str = Field(..., min_length=1, description="Username is required")
    password: str = Field(..., min_length=1, description="Password is required")
