"""
Aula Backend — Upload Storage Service
=======================================

What:  Validates, stores and resolves uploaded files (subject covers, news
       images, task attachments).
Why:   Centralizes all file system operations behind one set of checks.
How:   Extension allow-list and size limit, then an async write into a
       date-organized directory with a UUID filename. The public URL is built
       from PUBLIC_BASE_URL so clients can store it in portada_url /
       archivo_url.
Who:   Called by the POST /api/upload and GET /api/files routes.

Security Model:
    1. Extension check:   Only known document/image types are accepted
    2. Size check:        Content-Length first, then actual byte count
    3. UUID filename:     No user input reaches the file system path
    4. Resolve check:     Served paths must stay inside the storage root
"""

import logging
import mimetypes
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from app.config import settings
from app.exceptions import AulaError, FileStorageError, NotFoundError, ValidationError
from app.results import Err, Ok, Result
from app.schemas.common import UploadResult

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".webp",
    ".pdf", ".txt",
    ".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx",
}


class FileService:
    """
    Manages upload validation, storage and lookup.

    Directory Structure:
        storage/
        └── 2025/
            └── 03/
                └── 01/
                    ├── a1b2c3d4-5678.pdf
                    └── e5f6g7h8-9012.png
    """

    def __init__(self, storage_root: Optional[str] = None, max_size: Optional[int] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
            max_size:     Override the configured upload limit in bytes.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.max_size = max_size or settings.max_upload_size
        self.storage_root.mkdir(parents=True, exist_ok=True)

    def validate_extension(self, filename: str) -> str:
        """Returns the normalized extension or raises ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="file",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Rejects empty and oversized uploads.

        Content-Length is checked first; the actual size catches clients
        that send a wrong header.
        """
        max_mb = self.max_size / (1024 * 1024)

        if actual_size == 0:
            raise ValidationError(message="The uploaded file is empty.", field="file")

        if content_length and content_length > self.max_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "reported_size": content_length},
            )

        if actual_size > self.max_size:
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        """Creates a YYYY/MM/DD/<uuid><ext> path. Returns (absolute, relative)."""
        now = datetime.now(timezone.utc)
        relative_path = f"{now.strftime('%Y/%m/%d')}/{uuid.uuid4()}{extension}"
        return self.storage_root / relative_path, relative_path

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write validated content to disk.

        Raises:
            FileStorageError if directory creation or the write fails;
            any partial file is removed first.
        """
        absolute_path, relative_path = self._generate_storage_path(extension)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            await self.cleanup_file(str(absolute_path))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"path": relative_path, "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", relative_path, len(content))
        return str(absolute_path), relative_path

    async def cleanup_file(self, file_path: str) -> None:
        """Best-effort removal of a partially written file."""
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    def public_url(self, relative_path: str) -> str:
        return f"{settings.public_base_url}/api/files/{relative_path}"

    async def save_upload(
        self,
        filename: str,
        content: bytes,
        content_length: Optional[int] = None,
    ) -> Result:
        """
        Complete validation and storage pipeline for POST /api/upload.

        Returns:
            Ok(UploadResult) or Err(ValidationError | FileStorageError)
        """
        try:
            ext = self.validate_extension(filename)
            self.validate_size(content_length, len(content))
            _, relative_path = await self.store_file(content, ext)
        except AulaError as e:
            return Err(e)

        content_type, _ = mimetypes.guess_type(filename)
        return Ok(UploadResult(
            url=self.public_url(relative_path),
            path=relative_path,
            size=len(content),
            content_type=content_type or "application/octet-stream",
        ))

    def resolve(self, relative_path: str) -> Result:
        """
        Map a stored relative path back to an existing file on disk.

        Returns:
            Ok(Path), Err(ValidationError) for paths escaping the storage
            root, Err(NotFoundError) when nothing is stored there.
        """
        full_path = (self.storage_root / relative_path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            return Err(ValidationError(message="Invalid file path", field="path"))
        if not full_path.is_file():
            return Err(NotFoundError(resource="file", resource_id=relative_path))
        return Ok(full_path)


file_service = FileService()
