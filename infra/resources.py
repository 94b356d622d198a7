"""Infrastructure resources: DB, MinIO.

This module is part of the infra layer and must not import from application features.
"""
from io import BytesIO
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from minio import Minio
from minio.error import S3Error
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker


class DatabaseResource:
    """Database resource for dependency injection."""

    def __init__(self, database_url: str, engine_options: Optional[Dict[str, Any]] = None):
        self.database_url = database_url
        self.engine_options = engine_options or {}
        self.engine = None
        self.session_factory = None

    async def init(self):
        """Initialize database connection."""
        options = {"echo": False, "pool_pre_ping": True, "pool_recycle": 3600}
        options.update(self.engine_options)
        self.engine = create_async_engine(self.database_url, **options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return self

    def get_session(self) -> AsyncSession:
        """Get database session (synchronous accessor)."""
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self.session_factory()

    async def shutdown(self):
        """Shutdown database connection."""
        if self.engine:
            await self.engine.dispose()


class MinIOResource:
    """MinIO resource for dependency injection."""

    def __init__(
        self, endpoint: str, access_key: str, secret_key: str, bucket_name: str
    ):
        self.endpoint = endpoint
        self.access_key = access_key
        self.secret_key = secret_key
        self.bucket_name = bucket_name
        self.client = None

    async def init(self):
        """Initialize MinIO client."""
        # Parse endpoint to determine secure flag
        parsed = urlparse(
            self.endpoint if "://" in self.endpoint else f"http://{self.endpoint}"
        )
        secure = parsed.scheme == "https"
        netloc = parsed.netloc or parsed.path  # handle cases like "minio:9000"

        self.client = Minio(
            endpoint=netloc,
            access_key=self.access_key,
            secret_key=self.secret_key,
            secure=secure,
        )

        await self.ensure_bucket()
        return self

    async def ensure_bucket(self):
        """Ensure bucket exists."""
        assert self.client is not None, "MinIO client not initialized"
        found = self.client.bucket_exists(self.bucket_name)
        if not found:
            self.client.make_bucket(self.bucket_name)

    async def get_object_bytes(self, object_name: str) -> bytes:
        """Get object bytes from the avatar bucket."""
        assert self.client is not None, "MinIO client not initialized"

        response = None
        try:
            response = self.client.get_object(self.bucket_name, object_name)
            return response.read()
        except S3Error as e:
            raise RuntimeError(
                f"Failed to get object {object_name} from bucket {self.bucket_name}: {e}"
            ) from e
        finally:
            if response is not None:
                response.close()
                response.release_conn()

    async def put_object_bytes(
        self,
        object_name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Put object bytes into the avatar bucket."""
        assert self.client is not None, "MinIO client not initialized"

        try:
            self.client.put_object(
                self.bucket_name,
                object_name,
                BytesIO(data),
                len(data),
                content_type=content_type,
            )
        except S3Error as e:
            raise RuntimeError(
                f"Failed to put object {object_name} to bucket {self.bucket_name}: {e}"
            ) from e

    async def object_exists(self, object_name: str) -> bool:
        """Check if object exists in the avatar bucket."""
        assert self.client is not None, "MinIO client not initialized"

        try:
            self.client.stat_object(self.bucket_name, object_name)
            return True
        except S3Error:
            return False

    async def shutdown(self):
        """Shutdown MinIO client."""
        self.client = None
        return self
