import logging
import os
import time
import uuid
from datetime import datetime, timezone
import aiofiles
import aiofiles.os
from fastapi import UploadFile
from socialcare.config import get_settings
from socialcare.exceptions import NotFoundError, ValidationFailed

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class AttachmentService:
    """Stores case attachments on local disk under ``settings.upload_dir``."""

    @property
    def upload_dir(self) -> str:
        return get_settings().upload_dir

    def path_for(self, filename: str) -> str:
        # Stored names are generated here; anything with a path component is foreign
        if not filename or os.path.basename(filename) != filename or filename.startswith("."):
            raise NotFoundError("Attachment not found")
        return os.path.join(self.upload_dir, filename)

    async def save(self, file: UploadFile, uploaded_by: int) -> dict:
        """Write the upload to disk and return the attachment record to embed in the case."""
        if not file.filename:
            raise ValidationFailed("No file uploaded")

        os.makedirs(self.upload_dir, exist_ok=True)
        original_name = os.path.basename(file.filename)
        ext = os.path.splitext(original_name)[1].lower()
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext}"
        path = os.path.join(self.upload_dir, stored_name)

        size = await self._write_limited(file, path, get_settings().max_upload_bytes)
        if size == 0:
            await aiofiles.os.remove(path)
            raise ValidationFailed("Uploaded file is empty")

        logger.info("Stored attachment %s (%d bytes) for user %s", stored_name, size, uploaded_by)
        return {
            "filename": stored_name,
            "original_name": original_name,
            "mime_type": file.content_type or self._guess_type(original_name),
            "size": size,
            "uploaded_by": uploaded_by,
            "uploaded_at": datetime.now(timezone.utc).isoformat(),
        }

    async def _write_limited(self, file: UploadFile, path: str, limit: int) -> int:
        """Copy the upload to ``path`` in chunks, giving up as soon as it exceeds ``limit`` bytes."""
        size = 0
        async with aiofiles.open(path, "wb") as f:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > limit:
                    break
                await f.write(chunk)
        if size > limit:
            await aiofiles.os.remove(path)
            raise ValidationFailed("File too large")
        return size

    async def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)

    async def exists(self, filename: str) -> bool:
        return await aiofiles.os.path.exists(self.path_for(filename))

    def _guess_type(self, filename: str) -> str:
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        type_map = {
            "pdf": "application/pdf",
            "txt": "text/plain",
            "png": "image/png",
            "jpg": "image/jpeg",
            "jpeg": "image/jpeg",
            "doc": "application/msword",
            "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        }
        return type_map.get(ext, "application/octet-stream")


attachment_service = AttachmentService()
