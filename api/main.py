import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import text
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

from api.bootstrap import seed_defaults
from core.logging import configure_logging
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

configure_logging()

logger = logging.getLogger("chatdesk")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("Starting application initialization...")
    start_time = time.time()

    try:
        logger.info("Initializing database connection...")
        db_start = time.time()
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        async with db_resource.engine.begin() as _conn:
            await _conn.execute(text("SELECT 1"))
        logger.info(f"Database connection established in {time.time() - db_start:.2f}s")

        logger.info("Initializing MinIO client...")
        minio_start = time.time()
        minio_resource = _app.container.infrastructure.minio_client()
        await minio_resource.init()
        logger.info(f"MinIO client initialized in {time.time() - minio_start:.2f}s")

        session = db_resource.get_session()
        try:
            await seed_defaults(
                session,
                SETTINGS,
                _app.container.services.user_service(),
                _app.container.services.channel_service(),
            )
        finally:
            await session.close()

        logger.info(f"Application startup completed in {time.time() - start_time:.2f}s")
    except Exception as e:
        logger.exception(f"Failed to initialize application: {e}")
        raise

    yield

    try:
        await _app.container.infrastructure.minio_client().shutdown()
        await _app.container.infrastructure.database().shutdown()
        logger.info("Application shutdown complete")
    except Exception:
        logger.exception("Error during shutdown")


def register_exception_handlers(_app: FastAPI) -> None:
    @_app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "detail": getattr(exc, "detail", "Not Found"),
                "status_code": 404,
            },
        )

    @_app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Validation Error", "detail": str(exc), "status_code": 422},
        )

    @_app.exception_handler(PydanticValidationError)
    async def pydantic_validation_handler(request: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Validation Error", "detail": str(exc), "status_code": 422},
        )

    @_app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": "An unexpected error occurred",
                "status_code": 500,
            },
        )


def create_fastapi_app() -> CustomFastAPI:
    origins = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    _app = CustomFastAPI(
        title="ChatDesk API",
        description="Customer support chat: attendants, clients, channels and conversations",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    _app.container = DependencyContainer()
    _app.container.wire(modules=[sys.modules[__name__]])
    _app.container.init_resources()

    _app.add_middleware(
        SessionMiddleware,
        secret_key=SETTINGS.SESSION.SESSION_SECRET.get_secret_value(),
        session_cookie=SETTINGS.SESSION.SESSION_COOKIE,
        max_age=SETTINGS.SESSION.SESSION_MAX_AGE,
        same_site="lax",
        https_only=SETTINGS.SESSION.SESSION_HTTPS_ONLY,
    )
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.features.auth.router import router as auth_router
    from api.features.channels.router import router as channels_router
    from api.features.conversations.router import router as conversations_router
    from api.features.uploads.router import files_router, router as upload_router
    from api.features.users.router import router as users_router

    _app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    _app.include_router(users_router, prefix="/api/users", tags=["Users"])
    _app.include_router(channels_router, prefix="/api/channels", tags=["Channels"])
    _app.include_router(
        conversations_router, prefix="/api/conversations", tags=["Conversations"]
    )
    _app.include_router(upload_router, prefix="/api/upload", tags=["Uploads"])
    _app.include_router(files_router, prefix="/uploads", tags=["Uploads"])

    @_app.get("/health")
    async def health():
        return {"status": "ok"}

    register_exception_handlers(_app)
    return _app


app = create_fastapi_app()
