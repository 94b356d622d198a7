"""Validators for avatar uploads."""
import logging

from fastapi import UploadFile

from api.features.uploads.exceptions import AvatarValidationError
from api.shared.utils import get_file_extension

logger = logging.getLogger(__name__)


class AvatarValidator:
    ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
    ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}

    @classmethod
    async def validate_upload(cls, file: UploadFile, max_bytes: int) -> bytes:
        """Check type and size and return the file content."""
        if not file.filename:
            raise AvatarValidationError("No file uploaded")

        cls._validate_file_type(file)

        content = await file.read()
        cls._validate_file_size(content, max_bytes)

        await file.seek(0)
        return content

    @classmethod
    def _validate_file_type(cls, file: UploadFile) -> None:
        extension = get_file_extension(file.filename or "")
        content_type = (file.content_type or "").lower()
        if extension not in cls.ALLOWED_EXTENSIONS or content_type not in cls.ALLOWED_MIME_TYPES:
            logger.warning(
                f"Rejected avatar upload: {file.filename} ({file.content_type})"
            )
            raise AvatarValidationError(
                "Only images are allowed (jpeg, jpg, png, gif)",
                details={"filename": file.filename, "content_type": file.content_type},
            )

    @classmethod
    def _validate_file_size(cls, content: bytes, max_bytes: int) -> None:
        if len(content) == 0:
            raise AvatarValidationError("Empty file provided")
        if len(content) > max_bytes:
            raise AvatarValidationError(
                f"File too large. Maximum size: {max_bytes // (1024 * 1024)}MB",
                status_code=413,
            )
