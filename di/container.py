"""Centralized dependency injection container."""
from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource, MinIOResource


class InfrastructureContainer(containers.DeclarativeContainer):
    # Database
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
    )

    # MinIO (avatars)
    minio_client = providers.Resource(
        MinIOResource,
        endpoint=SETTINGS.MINIO.MINIO_ENDPOINT,
        access_key=SETTINGS.MINIO.MINIO_ACCESS_KEY,
        secret_key=SETTINGS.MINIO.MINIO_SECRET_KEY.get_secret_value(),
        bucket_name=SETTINGS.MINIO.MINIO_BUCKET,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    protocol_generator = providers.Singleton(
        "api.features.conversations.protocol.ProtocolGenerator",
        length=SETTINGS.PROTOCOL.PROTOCOL_LENGTH,
    )

    auth_service = providers.Factory("api.features.auth.service.AuthService")

    user_service = providers.Factory("api.features.users.service.UserService")

    channel_service = providers.Factory("api.features.channels.service.ChannelService")

    conversation_service = providers.Factory(
        "api.features.conversations.service.ConversationService",
        protocol_generator=protocol_generator,
        max_attempts=SETTINGS.PROTOCOL.PROTOCOL_MAX_ATTEMPTS,
    )

    avatar_service = providers.Factory(
        "api.features.uploads.service.AvatarService",
        storage_client=infrastructure.minio_client,
        prefix=SETTINGS.UPLOAD.AVATAR_PREFIX,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    auth_controller = providers.Factory(
        "api.features.auth.controller.AuthController",
        auth_service=services.auth_service,
    )

    user_controller = providers.Factory(
        "api.features.users.controller.UserController",
        user_service=services.user_service,
    )

    channel_controller = providers.Factory(
        "api.features.channels.controller.ChannelController",
        channel_service=services.channel_service,
    )

    conversation_controller = providers.Factory(
        "api.features.conversations.controller.ConversationController",
        conversation_service=services.conversation_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.auth.dependencies",
            "api.features.auth.router",
            "api.features.users.router",
            "api.features.channels.router",
            "api.features.conversations.router",
            "api.features.uploads.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
