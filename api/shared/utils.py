"""Common utility functions."""
import mimetypes
import random
import time
from pathlib import Path


def get_file_extension(filename: str) -> str:
    """Get file extension from filename."""
    return Path(filename).suffix.lower()


def get_mime_type(filename: str) -> str:
    """Get MIME type from filename."""
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or "application/octet-stream"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage."""
    unsafe_chars = '<>:"/\\|?*'
    for char in unsafe_chars:
        filename = filename.replace(char, "_")
    return filename


def unique_filename(fieldname: str, original: str) -> str:
    """Build `<field>-<millis>-<random><ext>` for a stored upload."""
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{fieldname}-{suffix}{get_file_extension(original)}"


def generate_storage_path(filename: str, prefix: str) -> str:
    """Generate storage path for file."""
    return f"{prefix}/{filename}"
