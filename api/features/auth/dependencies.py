"""Request guards: session authentication and role checks."""
from dependency_injector.wiring import Provide, inject
from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.auth.security import SESSION_USER_KEY
from api.features.users.models import UserModel
from api.features.users.service import UserService
from api.shared.db import get_db_session
from di.container import ApplicationContainer


@inject
async def get_current_user(
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
    user_service: UserService = Depends(
        Provide[ApplicationContainer.services.user_service]
    ),
) -> UserModel:
    """Resolve the logged-in user from the session cookie."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await user_service.get_user(user_id, db_session=db_session)
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def require_attendant(
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    if not current_user.is_attendant:
        raise HTTPException(
            status_code=403,
            detail="Access denied. Only attendants can perform this action.",
        )
    return current_user
