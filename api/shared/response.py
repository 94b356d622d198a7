"""Envelope shared by every JSON endpoint."""
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    """`{"data": ..., "message": ..., "status": "ok"}`; errors use FastAPI's `detail` body."""

    data: Optional[T] = Field(default=None, description="Payload of the call")
    message: Optional[str] = Field(default=None, examples=["Conversation created"])
    status: Literal["ok"] = Field(default="ok")

    @classmethod
    def success(cls, data: Optional[T] = None, message: str = "Success") -> "ResponseModel[T]":
        return cls(data=data, message=message)
