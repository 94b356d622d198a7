"""Routers for avatar upload and retrieval."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from api.features.auth.dependencies import get_current_user
from api.features.uploads.dtos import AvatarUploadResponse
from api.features.uploads.exceptions import AvatarNotFoundError, AvatarValidationError
from api.features.uploads.service import AvatarService
from api.features.uploads.validators import AvatarValidator
from api.features.users.models import UserModel
from api.shared.response import ResponseModel
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
files_router = APIRouter()
logger = logging.getLogger("chatdesk.uploads.router")


@router.post("/avatar", response_model=ResponseModel[AvatarUploadResponse])
@inject
async def upload_avatar(
    avatar: UploadFile = File(...),
    _user: UserModel = Depends(get_current_user),
    service: AvatarService = Depends(
        Provide[DependencyContainer.services.avatar_service]
    ),
):
    try:
        content = await AvatarValidator.validate_upload(
            avatar, SETTINGS.UPLOAD.AVATAR_MAX_BYTES
        )
        url = await service.store_avatar(
            avatar.filename, content, avatar.content_type or "application/octet-stream"
        )
        return ResponseModel.success(
            data=AvatarUploadResponse(avatar_url=url), message="Avatar uploaded"
        )
    except AvatarValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Avatar upload failed")
        raise HTTPException(status_code=500, detail="Avatar upload failed")


@files_router.get("/avatars/{filename}")
@inject
async def get_avatar(
    filename: str,
    service: AvatarService = Depends(
        Provide[DependencyContainer.services.avatar_service]
    ),
):
    try:
        data, media_type = await service.load_avatar(filename)
    except AvatarNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return Response(
        content=data,
        media_type=media_type,
        headers={"Access-Control-Allow-Origin": "*"},
    )
