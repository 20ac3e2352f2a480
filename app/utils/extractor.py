# ========================================
# app/utils/extractor.py
# ========================================

import os
from dataclasses import dataclass

import fitz  # PyMuPDF
from loguru import logger

SUPPORTED_EXTENSIONS = (".pdf", ".txt")


@dataclass(frozen=True)
class Extraction:
    """Outcome of reading an uploaded resume."""

    text: str
    status: str  # "ok", "unsupported", "failed"

    @property
    def ok(self) -> bool:
        return self.status == "ok" and bool(self.text.strip())


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def pdf_to_text(content: bytes) -> str:
    with fitz.open(stream=content, filetype="pdf") as doc:
        text = "\n".join(page.get_text("text") for page in doc)
    return text.strip()


def extract_text(content: bytes, extension: str) -> Extraction:
    """
    Turn an uploaded resume into plain text.

    PDF and plain-text files are recognised; anything else comes back as
    "unsupported". Parse errors never propagate: the caller gets a "failed"
    extraction and carries on with a degraded score.
    """
    extension = extension.lower()
    if extension and not extension.startswith("."):
        extension = f".{extension}"

    if extension not in SUPPORTED_EXTENSIONS:
        logger.warning(f"Unsupported resume type '{extension}', skipping extraction")
        return Extraction(text="", status="unsupported")

    if not content:
        logger.warning("Empty resume upload, nothing to extract")
        return Extraction(text="", status="failed")

    try:
        if extension == ".pdf":
            text = pdf_to_text(content)
        else:
            text = content.decode("utf-8").strip()
    except Exception as e:
        logger.warning(f"Resume extraction failed ({extension}): {e}")
        return Extraction(text="", status="failed")

    if not text:
        return Extraction(text="", status="failed")
    return Extraction(text=text, status="ok")
