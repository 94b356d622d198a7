"""Shared DTOs for the ChatDesk API."""
from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseDTO):
    """Acknowledgement for operations without a payload."""
    success: bool = Field(default=True)
