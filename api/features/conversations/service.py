"""Service layer for the Conversations feature."""
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.channels.repository import ChannelRepository
from api.features.conversations.dtos import (
    AppendMessageRequest,
    ConversationDTO,
    CreateConversationRequest,
    MessageDTO,
    UpdateConversationRequest,
)
from api.features.conversations.entities.conversation import Conversation
from api.features.conversations.entities.message import Message
from api.features.conversations.exceptions import (
    ConversationNotFoundError,
    ConversationValidationError,
    ProtocolExhaustedError,
)
from api.features.conversations.protocol import (
    MAX_ATTEMPTS,
    Created,
    Exhausted,
    ProtocolGenerator,
    UniqueProtocolPolicy,
)
from api.features.conversations.repository import (
    ConversationRepository,
    MessageRepository,
)
from api.features.users.entities.user import UserRole
from api.features.users.repository import UserRepository
from api.shared.exceptions import ChatDeskException, DatabaseError

logger = structlog.get_logger("chatdesk.conversations.service")


class ConversationService:
    """Conversation lifecycle and messaging."""

    def __init__(
        self,
        protocol_generator: Optional[ProtocolGenerator] = None,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        self.protocol_policy = UniqueProtocolPolicy(
            protocol_generator or ProtocolGenerator(), max_attempts=max_attempts
        )

    async def _check_references(
        self, values: Dict[str, Any], *, db_session: AsyncSession
    ) -> None:
        """Validate channel and participant ids present in `values`."""
        if values.get("channel_id") is not None:
            channel = await ChannelRepository(db_session).get_by_id(values["channel_id"])
            if channel is None:
                raise ConversationValidationError(
                    "Channel not found", {"channel_id": values["channel_id"]}
                )
            if not channel.is_active:
                raise ConversationValidationError(
                    "Channel is not active", {"channel_id": channel.id}
                )

        users = UserRepository(db_session)
        for key, role in (("client_id", UserRole.CLIENT), ("attendant_id", UserRole.ATTENDANT)):
            if values.get(key) is None:
                continue
            if await users.get_with_role(values[key], role) is None:
                raise ConversationValidationError(
                    f"{role.value.capitalize()} not found", {key: values[key]}
                )

    async def create_conversation(
        self, request: CreateConversationRequest, *, db_session: AsyncSession
    ) -> ConversationDTO:
        """Create a conversation under a freshly allocated unique protocol."""
        values = request.model_dump()
        await self._check_references(values, db_session=db_session)

        repository = ConversationRepository(db_session)

        async def insert(protocol: str):
            return await repository.insert_with_protocol(values, protocol)

        outcome = await self.protocol_policy.run(insert)

        if isinstance(outcome, Created):
            await db_session.commit()
            logger.info(
                "conversation.created",
                conversation_id=outcome.record.id,
                protocol=outcome.protocol,
                attempts=outcome.attempts,
            )
            return ConversationDTO.from_entity(outcome.record)

        await db_session.rollback()
        if isinstance(outcome, Exhausted):
            logger.error("conversation.create.exhausted", attempts=outcome.attempts)
            raise ProtocolExhaustedError(outcome.attempts) from outcome.last_collision

        logger.error(
            "conversation.create.failed",
            attempts=outcome.attempts,
            error=repr(outcome.cause),
        )
        if isinstance(outcome.cause, ChatDeskException):
            raise outcome.cause
        raise DatabaseError.from_cause(
            "storing conversation", outcome.cause
        ) from outcome.cause

    async def get_conversation(
        self, conversation_id: str, *, db_session: AsyncSession
    ) -> Optional[Conversation]:
        return await ConversationRepository(db_session).get_by_id(conversation_id)

    async def list_conversations(
        self, user_id: Optional[str] = None, *, db_session: AsyncSession
    ) -> List[ConversationDTO]:
        """All conversations, or only those `user_id` takes part in."""
        repository = ConversationRepository(db_session)
        if user_id is None:
            entities = await repository.list_all()
        else:
            entities = await repository.list_for_user(user_id)
        return [ConversationDTO.from_entity(entity) for entity in entities]

    async def update_conversation(
        self,
        conversation_id: str,
        request: UpdateConversationRequest,
        *,
        db_session: AsyncSession,
    ) -> ConversationDTO:
        repository = ConversationRepository(db_session)
        if not await repository.exists(conversation_id):
            raise ConversationNotFoundError(conversation_id)

        update_data = request.model_dump(exclude_unset=True)
        await self._check_references(update_data, db_session=db_session)

        try:
            if update_data:
                entity = await repository.update_by_id(conversation_id, **update_data)
            else:
                # empty patches still count as activity
                await repository.touch(conversation_id)
                entity = await repository.get_by_id(conversation_id)
                await db_session.refresh(entity)
            await db_session.commit()
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.error(
                "conversation.update.failed",
                conversation_id=conversation_id,
                error=repr(e),
            )
            raise DatabaseError.from_cause("updating conversation", e) from e
        logger.info(
            "conversation.updated",
            conversation_id=conversation_id,
            fields=sorted(update_data),
        )
        return ConversationDTO.from_entity(entity)

    async def delete_conversation(
        self, conversation_id: str, *, db_session: AsyncSession
    ) -> None:
        repository = ConversationRepository(db_session)
        deleted = await repository.delete(conversation_id)
        if not deleted:
            raise ConversationNotFoundError(conversation_id)
        await db_session.commit()
        logger.info("conversation.deleted", conversation_id=conversation_id)

    async def list_messages(
        self, conversation_id: str, *, db_session: AsyncSession
    ) -> List[MessageDTO]:
        entities = await MessageRepository(db_session).list_for_conversation(
            conversation_id
        )
        return [MessageDTO.from_entity(entity) for entity in entities]

    async def append_message(
        self,
        conversation_id: str,
        sender_id: str,
        request: AppendMessageRequest,
        *,
        db_session: AsyncSession,
    ) -> MessageDTO:
        entity = await MessageRepository(db_session).create(
            Message(
                conversation_id=conversation_id,
                sender_id=sender_id,
                content=request.content,
            )
        )
        await ConversationRepository(db_session).touch(conversation_id)
        await db_session.commit()
        logger.info(
            "conversation.message.appended",
            conversation_id=conversation_id,
            message_id=entity.id,
        )
        return MessageDTO.from_entity(entity)
