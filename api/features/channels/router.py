"""Router for the Channels feature."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.dependencies import get_current_user, require_attendant
from api.features.channels.controller import ChannelController
from api.features.channels.dtos import (
    ChannelCreateRequest,
    ChannelDTO,
    ChannelListResponse,
)
from api.features.users.models import UserModel
from api.shared.db import get_db_session
from api.shared.exceptions import ConflictError, NotFoundError
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chatdesk.channels.router")


@router.get("/", response_model=ResponseModel[ChannelListResponse])
@inject
async def list_channels(
    _user: UserModel = Depends(get_current_user),
    controller: ChannelController = Depends(
        Provide[DependencyContainer.controllers.channel_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    result = await controller.list_channels(db_session=db_session)
    return ResponseModel.success(data=result, message="Channels retrieved")


@router.get("/{channel_id}", response_model=ResponseModel[ChannelDTO])
@inject
async def get_channel(
    channel_id: str,
    _user: UserModel = Depends(get_current_user),
    controller: ChannelController = Depends(
        Provide[DependencyContainer.controllers.channel_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        channel = await controller.get_channel(channel_id, db_session=db_session)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ResponseModel.success(data=channel, message="Channel fetched")


@router.post("/", response_model=ResponseModel[ChannelDTO])
@inject
async def create_channel(
    request: ChannelCreateRequest,
    _attendant: UserModel = Depends(require_attendant),
    controller: ChannelController = Depends(
        Provide[DependencyContainer.controllers.channel_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        channel = await controller.create_channel(request, db_session=db_session)
        return ResponseModel.success(data=channel, message="Channel created")
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Failed to create channel")
        raise HTTPException(status_code=500, detail="Failed to create channel")
