"""Router for the Conversation feature."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.dependencies import get_current_user, require_attendant
from api.features.conversations.controller import ConversationController
from api.features.conversations.dtos import (
    AppendMessageRequest,
    ConversationDTO,
    ConversationListResponse,
    CreateConversationRequest,
    MessageDTO,
    MessagesResponse,
    UpdateConversationRequest,
)
from api.features.conversations.exceptions import ProtocolExhaustedError
from api.features.users.models import UserModel
from api.shared.db import get_db_session
from api.shared.dtos import SuccessResponse
from api.shared.exceptions import (
    ChatDeskException,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chatdesk.conversations.router")

CREATE_FAILED = "Failed to create conversation"


@router.get("/", response_model=ResponseModel[ConversationListResponse])
@inject
async def list_conversations(
    user: UserModel = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        result = await controller.list_conversations(user, db_session=db_session)
        return ResponseModel.success(data=result, message="Conversations listed")
    except Exception:
        logger.exception("Failed to list conversations")
        raise HTTPException(status_code=500, detail="Failed to list conversations")


@router.post("/", response_model=ResponseModel[ConversationDTO])
@inject
async def create_conversation(
    request: CreateConversationRequest,
    _attendant: UserModel = Depends(require_attendant),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        conv = await controller.create_conversation(request, db_session=db_session)
        return ResponseModel.success(data=conv, message="Conversation created")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProtocolExhaustedError:
        logger.exception("Protocol space exhausted while creating conversation")
        raise HTTPException(status_code=500, detail=CREATE_FAILED)
    except ChatDeskException as e:
        raise HTTPException(status_code=400, detail=f"{CREATE_FAILED}: {e.message}")
    except Exception:
        logger.exception("Create conversation failed")
        raise HTTPException(status_code=500, detail=CREATE_FAILED)


@router.get("/{conversation_id}", response_model=ResponseModel[ConversationDTO])
@inject
async def get_conversation(
    conversation_id: str,
    user: UserModel = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        conv = await controller.get_conversation(conversation_id, user, db_session=db_session)
        return ResponseModel.success(data=conv, message="Conversation fetched")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.patch("/{conversation_id}", response_model=ResponseModel[ConversationDTO])
@inject
async def update_conversation(
    conversation_id: str,
    request: UpdateConversationRequest,
    _attendant: UserModel = Depends(require_attendant),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        conv = await controller.update_conversation(
            conversation_id, request, db_session=db_session
        )
        return ResponseModel.success(data=conv, message="Conversation updated")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ChatDeskException as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Update conversation failed")
        raise HTTPException(status_code=500, detail="Failed to update conversation")


@router.delete("/{conversation_id}", response_model=ResponseModel[SuccessResponse])
@inject
async def delete_conversation(
    conversation_id: str,
    _attendant: UserModel = Depends(require_attendant),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        await controller.delete_conversation(conversation_id, db_session=db_session)
        return ResponseModel.success(data=SuccessResponse(), message="Conversation deleted")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Delete conversation failed")
        raise HTTPException(status_code=500, detail="Failed to delete conversation")


@router.get(
    "/{conversation_id}/messages", response_model=ResponseModel[MessagesResponse]
)
@inject
async def get_messages(
    conversation_id: str,
    user: UserModel = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        result = await controller.get_messages(conversation_id, user, db_session=db_session)
        return ResponseModel.success(data=result, message="Messages fetched")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.post("/{conversation_id}/messages", response_model=ResponseModel[MessageDTO])
@inject
async def append_message(
    conversation_id: str,
    request: AppendMessageRequest,
    user: UserModel = Depends(get_current_user),
    controller: ConversationController = Depends(
        Provide[DependencyContainer.controllers.conversation_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        msg = await controller.append_message(
            conversation_id, user, request, db_session=db_session
        )
        return ResponseModel.success(data=msg, message="Message appended")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except Exception:
        logger.exception("Append message failed")
        raise HTTPException(status_code=500, detail="Failed to append message")
