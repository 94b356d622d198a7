"""Router for the Users feature.

Attendants and clients are exposed as two resource collections over the same
table; every mutation requires an attendant session.
"""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.dependencies import get_current_user, require_attendant
from api.features.users.controller import UserController
from api.features.users.dtos import (
    UserCreateRequest,
    UserListResponse,
    UserUpdateRequest,
)
from api.features.users.entities.user import UserRole
from api.features.users.models import UserModel
from api.shared.db import get_db_session
from api.shared.dtos import SuccessResponse
from api.shared.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chatdesk.users.router")

ROLE_COLLECTIONS = {
    "attendants": UserRole.ATTENDANT,
    "clients": UserRole.CLIENT,
}


def _role_for(collection: str) -> UserRole:
    role = ROLE_COLLECTIONS.get(collection)
    if role is None:
        raise HTTPException(status_code=404, detail=f"Unknown collection: {collection}")
    return role


@router.get("/all", response_model=ResponseModel[UserListResponse])
@inject
async def list_all_users(
    _user: UserModel = Depends(get_current_user),
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        result = await controller.list_users(None, db_session=db_session)
        return ResponseModel.success(data=result, message="Users retrieved")
    except Exception:
        logger.exception("Failed to list users")
        raise HTTPException(status_code=500, detail="Failed to list users")


@router.get("/{collection}", response_model=ResponseModel[UserListResponse])
@inject
async def list_users(
    collection: str,
    _attendant: UserModel = Depends(require_attendant),
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    role = _role_for(collection)
    try:
        result = await controller.list_users(role, db_session=db_session)
        return ResponseModel.success(data=result, message=f"{collection.capitalize()} retrieved")
    except Exception:
        logger.exception("Failed to list %s", collection)
        raise HTTPException(status_code=500, detail=f"Failed to list {collection}")


@router.post("/{collection}", response_model=ResponseModel[UserModel])
@inject
async def create_user(
    collection: str,
    request: UserCreateRequest,
    _attendant: UserModel = Depends(require_attendant),
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    role = _role_for(collection)
    try:
        user = await controller.create_user(request, role, db_session=db_session)
        return ResponseModel.success(data=user, message=f"{role.value.capitalize()} created")
    except (ConflictError, DatabaseError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Failed to create %s", role.value)
        raise HTTPException(status_code=500, detail=f"Failed to create {role.value}")


@router.patch("/{collection}/{user_id}", response_model=ResponseModel[UserModel])
@inject
async def update_user(
    collection: str,
    user_id: str,
    request: UserUpdateRequest,
    _attendant: UserModel = Depends(require_attendant),
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    role = _role_for(collection)
    try:
        user = await controller.update_user(user_id, role, request, db_session=db_session)
        return ResponseModel.success(data=user, message=f"{role.value.capitalize()} updated")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (ConflictError, DatabaseError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Failed to update %s", role.value)
        raise HTTPException(status_code=500, detail=f"Failed to update {role.value}")


@router.delete("/{collection}/{user_id}", response_model=ResponseModel[SuccessResponse])
@inject
async def delete_user(
    collection: str,
    user_id: str,
    attendant: UserModel = Depends(require_attendant),
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    role = _role_for(collection)
    try:
        await controller.delete_user(
            user_id, role, acting_user=attendant, db_session=db_session
        )
        return ResponseModel.success(data=SuccessResponse(), message=f"{role.value.capitalize()} deleted")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Failed to delete %s", role.value)
        raise HTTPException(status_code=500, detail=f"Failed to delete {role.value}")
