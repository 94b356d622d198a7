"""Router for the Auth feature."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.controller import AuthController
from api.features.auth.dependencies import get_current_user
from api.features.auth.dtos import LoginRequest
from api.features.auth.exceptions import InvalidCredentialsError
from api.features.users.models import UserModel
from api.shared.db import get_db_session
from api.shared.dtos import SuccessResponse
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chatdesk.auth.router")


@router.post("/login", response_model=ResponseModel[UserModel])
@inject
async def login(
    request: Request,
    credentials: LoginRequest,
    controller: AuthController = Depends(
        Provide[DependencyContainer.controllers.auth_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Start a session for valid credentials."""
    try:
        user = await controller.login(request, credentials, db_session=db_session)
        return ResponseModel.success(data=user, message="Logged in")
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail="Login failed")


@router.post("/logout", response_model=ResponseModel[SuccessResponse])
@inject
async def logout(
    request: Request,
    controller: AuthController = Depends(
        Provide[DependencyContainer.controllers.auth_controller]
    ),
):
    await controller.logout(request)
    return ResponseModel.success(data=SuccessResponse(), message="Logged out")


@router.get("/me", response_model=ResponseModel[UserModel])
async def me(current_user: UserModel = Depends(get_current_user)):
    return ResponseModel.success(data=current_user, message="Current user")
