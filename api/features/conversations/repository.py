"""Repositories for conversation persistence operations."""
from typing import Any, Dict, List, Union

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from api.features.conversations.entities.conversation import Conversation
from api.features.conversations.entities.message import Message
from api.features.conversations.protocol import StoreFailure, UniquenessViolation
from api.shared.base import BaseRepository
from api.shared.entities.base import utcnow
from infra.db_utils import unique_violation_field


class ConversationRepository(BaseRepository[Conversation]):
    """Repository for conversations, including the protocol-guarded insert."""

    model = Conversation

    async def insert_with_protocol(
        self, values: Dict[str, Any], protocol: str
    ) -> Union[Conversation, UniquenessViolation, StoreFailure]:
        """Insert one conversation under `protocol`.

        The insert runs in a SAVEPOINT so a rejected attempt leaves the
        surrounding transaction intact for the next one.
        """
        entity = Conversation(**values, protocol=protocol)
        try:
            async with self.session.begin_nested():
                self.session.add(entity)
                await self.session.flush()
        except IntegrityError as e:
            violated = unique_violation_field(e)
            if violated is not None:
                return UniquenessViolation(field=violated, cause=e)
            return StoreFailure(cause=e)
        except SQLAlchemyError as e:
            return StoreFailure(cause=e)

        await self.session.refresh(entity)
        return entity

    async def list_all(self) -> List[Conversation]:
        stmt = select(Conversation).order_by(
            Conversation.updated_at.desc(), Conversation.created_at.desc()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user(self, user_id: str) -> List[Conversation]:
        """Conversations where the user is the client or the attendant."""
        stmt = (
            select(Conversation)
            .where(
                or_(
                    Conversation.attendant_id == user_id,
                    Conversation.client_id == user_id,
                )
            )
            .order_by(Conversation.updated_at.desc(), Conversation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def touch(self, conversation_id: str) -> None:
        """Bump updated_at for recency ordering."""
        await self.session.execute(
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def list_for_conversation(self, conversation_id: str) -> List[Message]:
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
