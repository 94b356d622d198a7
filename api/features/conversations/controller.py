"""Controller for the Conversation feature."""
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.conversations.dtos import (
    AppendMessageRequest,
    ConversationDTO,
    ConversationListResponse,
    CreateConversationRequest,
    MessageDTO,
    MessagesResponse,
    UpdateConversationRequest,
)
from api.features.conversations.entities.conversation import Conversation
from api.features.conversations.exceptions import (
    ConversationAccessDeniedError,
    ConversationNotFoundError,
)
from api.features.conversations.service import ConversationService
from api.features.users.models import UserModel


class ConversationController:
    """Controller handling conversation CRUD, access rules and messages."""

    def __init__(self, conversation_service: ConversationService):
        self.conversation_service = conversation_service

    async def _get_visible(
        self, conversation_id: str, user: UserModel, *, db_session: AsyncSession
    ) -> Conversation:
        """Load a conversation the user may see: attendants see all, others only their own."""
        conversation = await self.conversation_service.get_conversation(
            conversation_id, db_session=db_session
        )
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        if not user.is_attendant and not conversation.has_participant(user.id):
            raise ConversationAccessDeniedError(conversation_id, user.id)
        return conversation

    async def list_conversations(
        self, user: UserModel, *, db_session: AsyncSession
    ) -> ConversationListResponse:
        items = await self.conversation_service.list_conversations(
            None if user.is_attendant else user.id, db_session=db_session
        )
        return ConversationListResponse(items=items, total=len(items))

    async def get_conversation(
        self, conversation_id: str, user: UserModel, *, db_session: AsyncSession
    ) -> ConversationDTO:
        conversation = await self._get_visible(conversation_id, user, db_session=db_session)
        return ConversationDTO.from_entity(conversation)

    async def create_conversation(
        self, request: CreateConversationRequest, *, db_session: AsyncSession
    ) -> ConversationDTO:
        return await self.conversation_service.create_conversation(
            request, db_session=db_session
        )

    async def update_conversation(
        self,
        conversation_id: str,
        request: UpdateConversationRequest,
        *,
        db_session: AsyncSession,
    ) -> ConversationDTO:
        return await self.conversation_service.update_conversation(
            conversation_id, request, db_session=db_session
        )

    async def delete_conversation(
        self, conversation_id: str, *, db_session: AsyncSession
    ) -> None:
        await self.conversation_service.delete_conversation(
            conversation_id, db_session=db_session
        )

    async def get_messages(
        self, conversation_id: str, user: UserModel, *, db_session: AsyncSession
    ) -> MessagesResponse:
        await self._get_visible(conversation_id, user, db_session=db_session)
        items = await self.conversation_service.list_messages(
            conversation_id, db_session=db_session
        )
        return MessagesResponse(items=items, total=len(items))

    async def append_message(
        self,
        conversation_id: str,
        user: UserModel,
        request: AppendMessageRequest,
        *,
        db_session: AsyncSession,
    ) -> MessageDTO:
        await self._get_visible(conversation_id, user, db_session=db_session)
        return await self.conversation_service.append_message(
            conversation_id, user.id, request, db_session=db_session
        )
