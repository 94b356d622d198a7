"""Request-scoped database session for routers and guards."""
import logging
from typing import Any, AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from di.container import ApplicationContainer
from infra.resources import DatabaseResource

logger = logging.getLogger("chatdesk.db")


@inject
async def get_db_session(
    db: DatabaseResource = Depends(
        Provide[ApplicationContainer.infrastructure.database]
    ),
) -> AsyncGenerator[AsyncSession, Any]:
    """Yield one AsyncSession per request.

    Services commit their own work; anything left uncommitted when the
    request fails is rolled back before the session is closed.
    """
    session = db.get_session()
    try:
        yield session
    except Exception:
        if session.in_transaction():
            await session.rollback()
        raise
    finally:
        try:
            await session.close()
        except SQLAlchemyError:
            logger.warning("Failed to close database session", exc_info=True)
