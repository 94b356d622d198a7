from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, PostgresDsn, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)


class PgDbSettings(CustomSettings):
    POSTGRES_ENGINE: str = Field(default="postgresql+asyncpg")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: SecretStr = Field(default="postgres")
    POSTGRES_DB: str = Field(default="chatdesk")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: PostgresDsn | str = Field(default="")

    @model_validator(mode="before")
    def validate_postgres_dsn(cls, data: dict):
        if isinstance(data, dict) and not data.get("DATABASE_URL"):
            _built_uri = PostgresDsn.build(
                scheme=data.get("POSTGRES_ENGINE", "postgresql+asyncpg"),
                username=data.get("POSTGRES_USER", "postgres"),
                password=data.get("POSTGRES_PASSWORD", "postgres"),
                host=data.get("POSTGRES_HOST", "localhost"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=data.get("POSTGRES_DB", "chatdesk"),
            ).unicode_string()
            data["DATABASE_URL"] = _built_uri
        return data


class MinIOSettings(CustomSettings):
    MINIO_ENDPOINT: str = Field(default="http://localhost:9000")
    MINIO_ACCESS_KEY: str = Field(default="minioadmin")
    MINIO_SECRET_KEY: SecretStr = Field(default="minioadmin")
    MINIO_BUCKET: str = Field(default="chatdesk")


class SessionSettings(CustomSettings):
    """Signed cookie session configuration.

    Env vars:
    - SESSION_SECRET
    - SESSION_COOKIE
    - SESSION_MAX_AGE (seconds)
    - SESSION_HTTPS_ONLY
    """

    SESSION_SECRET: SecretStr = Field(
        default="chatdesk-secret-key-change-in-production"
    )
    SESSION_COOKIE: str = Field(default="chatdesk_session")
    SESSION_MAX_AGE: int = Field(default=7 * 24 * 60 * 60)
    SESSION_HTTPS_ONLY: bool = Field(default=False)


class ProtocolSettings(CustomSettings):
    PROTOCOL_LENGTH: int = Field(default=10, ge=1)
    PROTOCOL_MAX_ATTEMPTS: int = Field(default=10, ge=1)


class UploadSettings(CustomSettings):
    AVATAR_MAX_BYTES: int = Field(default=5 * 1024 * 1024)
    AVATAR_PREFIX: str = Field(default="avatars")


class SeedSettings(CustomSettings):
    """Startup seed data: a default attendant and the default web channel."""

    SEED_TEST_USER: bool = Field(default=True)
    TEST_USERNAME: str = Field(default="teste")
    TEST_PASSWORD: SecretStr = Field(default="senha123")
    TEST_NAME: str = Field(default="Usuário Teste")
    DEFAULT_CHANNEL_NAME: str = Field(default="web")
    DEFAULT_CHANNEL_DESCRIPTION: str = Field(default="Canal Web Padrão")


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: PgDbSettings = Field(default_factory=PgDbSettings)
    MINIO: MinIOSettings = Field(default_factory=MinIOSettings)
    SESSION: SessionSettings = Field(default_factory=SessionSettings)
    PROTOCOL: ProtocolSettings = Field(default_factory=ProtocolSettings)
    UPLOAD: UploadSettings = Field(default_factory=UploadSettings)
    SEED: SeedSettings = Field(default_factory=SeedSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
