"""Exceptions for the Channels feature."""
from api.shared.exceptions import ConflictError, NotFoundError


class ChannelNotFoundError(NotFoundError):
    def __init__(self, channel_id: str):
        super().__init__(
            "Channel", channel_id, "CHANNEL_NOT_FOUND", {"channel_id": channel_id}
        )


class ChannelAlreadyExistsError(ConflictError):
    def __init__(self, name: str):
        message = f"Channel '{name}' already exists"
        super().__init__(message, {"name": name}, "CHANNEL_ALREADY_EXISTS")
