"""DTOs for the Uploads feature."""
from pydantic import Field

from api.shared.dtos import BaseDTO


class AvatarUploadResponse(BaseDTO):
    avatar_url: str = Field(description="Public URL of the stored avatar")
