"""Avatar storage backed by the object store."""
import structlog

from api.features.uploads.exceptions import AvatarNotFoundError
from api.shared.exceptions import StorageError
from api.shared.utils import (
    generate_storage_path,
    get_mime_type,
    sanitize_filename,
    unique_filename,
)
from infra.resources import MinIOResource

logger = structlog.get_logger("chatdesk.uploads.service")

PUBLIC_PREFIX = "/uploads"


class AvatarService:
    def __init__(self, storage_client: MinIOResource, prefix: str = "avatars"):
        self.storage_client = storage_client
        self.prefix = prefix

    def public_url(self, filename: str) -> str:
        return f"{PUBLIC_PREFIX}/{self.prefix}/{filename}"

    async def store_avatar(
        self, original_filename: str, content: bytes, content_type: str
    ) -> str:
        """Store the image and return its public URL."""
        filename = unique_filename("avatar", sanitize_filename(original_filename))
        storage_path = generate_storage_path(filename, self.prefix)
        try:
            await self.storage_client.put_object_bytes(
                storage_path, content, content_type=content_type
            )
        except RuntimeError as e:
            logger.error("avatar.store.failed", storage_path=storage_path, error=str(e))
            raise StorageError("Failed to store avatar", {"path": storage_path}) from e

        logger.info("avatar.stored", storage_path=storage_path, size=len(content))
        return self.public_url(filename)

    async def load_avatar(self, filename: str) -> tuple[bytes, str]:
        """Return the stored bytes and their MIME type."""
        safe_name = sanitize_filename(filename)
        storage_path = generate_storage_path(safe_name, self.prefix)
        if not await self.storage_client.object_exists(storage_path):
            raise AvatarNotFoundError(safe_name)
        try:
            data = await self.storage_client.get_object_bytes(storage_path)
        except RuntimeError as e:
            raise StorageError("Failed to read avatar", {"path": storage_path}) from e
        return data, get_mime_type(safe_name)
