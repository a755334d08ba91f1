"""
FileUploadService
Stores uploaded files on the local filesystem under unique names
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import uuid4

import aiofiles

from core.config import settings
from core.exceptions import ValidationException
from core.logging_config import logger


IMAGE_TYPES_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def guess_content_type(filename: str) -> str:
    """MIME type from the file extension, octet-stream when unknown"""
    suffix = Path(filename).suffix.lower()
    if suffix in IMAGE_TYPES_BY_EXTENSION:
        return IMAGE_TYPES_BY_EXTENSION[suffix]
    return mimetypes.guess_type(filename)[0] or "application/octet-stream"


@dataclass(frozen=True)
class StoredFile:
    """Result of a successful upload"""

    file_name: str
    file_path: str
    file_url: str


def validate_profile_photo(filename: str, size: int, content_type: Optional[str] = None) -> None:
    """
    Validate a profile photo before it is uploaded

    Args:
        filename: Original file name (used when content_type is unknown)
        size: File size in bytes
        content_type: MIME type, if known

    Raises:
        ValidationException if the type or size is not accepted
    """
    content_type = content_type or guess_content_type(filename)
    if content_type not in settings.ALLOWED_PHOTO_TYPES:
        raise ValidationException("photo", "Only JPEG, PNG, GIF, and WebP formats are allowed")

    max_size_bytes = settings.MAX_PHOTO_SIZE_MB * 1024 * 1024
    if size > max_size_bytes:
        raise ValidationException("photo", f"File must be less than {settings.MAX_PHOTO_SIZE_MB}MB")


class FileUploadService:
    """Local filesystem upload service"""

    def __init__(self, base_dir: Optional[str] = None):
        """
        Initialize file upload service

        Args:
            base_dir: Root directory for uploads (default from settings)
        """
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR)

    async def upload_file(
        self,
        filename: str,
        content: bytes,
        subfolder: str = ""
    ) -> StoredFile:
        """
        Save file content under a generated unique name

        Args:
            filename: Original file name; only its extension is kept
            content: File bytes
            subfolder: Optional folder below the upload root

        Returns:
            StoredFile with the generated name, absolute path and public URL
        """
        file_name = f"{uuid4()}{Path(filename).suffix}"

        upload_path = self.base_dir / subfolder if subfolder else self.base_dir
        upload_path.mkdir(parents=True, exist_ok=True)

        file_path = upload_path / file_name
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        file_url = f"/uploads/{subfolder + '/' if subfolder else ''}{file_name}"
        logger.info(f"File saved successfully: {file_path}")

        return StoredFile(
            file_name=file_name,
            file_path=str(file_path.absolute()),
            file_url=file_url,
        )

    async def delete_file(self, file_path: str) -> bool:
        """Delete file from storage"""
        try:
            Path(file_path).unlink()
            logger.info(f"File deleted: {file_path}")
            return True
        except OSError as e:
            logger.error(f"Error deleting file: {e}")
            return False
