# ========================================
# app/repositories/resume_files.py
# ========================================

import io
from typing import Optional, Tuple

from gridfs.errors import NoFile
from loguru import logger

from app.repositories.common import to_object_id, utcnow
from app.utils.errors import NotFoundError

RESUME_PATH_PREFIX = "/resume/files/"


def resume_path(file_id) -> str:
    return f"{RESUME_PATH_PREFIX}{file_id}"


def file_id_from_path(path: str) -> Optional[str]:
    if not path or not path.startswith(RESUME_PATH_PREFIX):
        return None
    return path[len(RESUME_PATH_PREFIX):]


class ResumeFileStorage:
    """Uploaded resume bytes kept in the GridFS `resumes` bucket."""

    def __init__(self, bucket):
        self.bucket = bucket

    async def save(self, content: bytes, filename: str, owner_id: str, content_type: Optional[str] = None) -> str:
        file_id = await self.bucket.upload_from_stream(
            filename=filename,
            source=io.BytesIO(content),
            metadata={
                "user_id": owner_id,
                "content_type": content_type or "application/octet-stream",
                "original_filename": filename,
                "uploaded_at": utcnow(),
            },
        )
        return resume_path(file_id)

    async def open(self, file_id: str) -> Tuple[bytes, str, dict]:
        oid = to_object_id(file_id)
        if oid is None:
            raise NotFoundError("Resume file not found")
        try:
            grid_out = await self.bucket.open_download_stream(oid)
        except NoFile:
            raise NotFoundError("Resume file not found")
        contents = await grid_out.read()
        return contents, grid_out.filename, grid_out.metadata or {}

    async def delete(self, path: str) -> None:
        oid = to_object_id(file_id_from_path(path))
        if oid is None:
            return
        try:
            await self.bucket.delete(oid)
        except NoFile:
            logger.warning(f"Resume file {oid} already gone")
