import os
from typing import Optional

from fastapi import UploadFile

from app.services.lifecycle import ResumeUpload
from app.utils.errors import BadRequestError

MAX_RESUME_BYTES = int(os.getenv("MAX_RESUME_BYTES", str(5 * 1024 * 1024)))


async def read_upload(file: Optional[UploadFile]) -> Optional[ResumeUpload]:
    """Buffer a multipart resume upload; None when no file was sent."""
    if file is None or not file.filename:
        return None

    contents = await file.read()
    if len(contents) > MAX_RESUME_BYTES:
        raise BadRequestError(f"File size exceeds {MAX_RESUME_BYTES // (1024 * 1024)}MB limit")

    return ResumeUpload(filename=file.filename, content=contents, content_type=file.content_type)
