"""Entity registry to ensure SQLAlchemy loads all table metadata.

Import all entity modules here so Alembic autogenerate can discover them.
"""
# Import base first to expose BaseEntity.metadata
from api.shared.entities.base import BaseEntity  # noqa: F401

# Feature: Users
from api.features.users.entities.user import User  # noqa: F401

# Feature: Channels
from api.features.channels.entities.channel import Channel  # noqa: F401

# Feature: Conversations
from api.features.conversations.entities.conversation import Conversation  # noqa: F401
from api.features.conversations.entities.message import Message  # noqa: F401
