"""Tests for resume text extraction."""

import fitz
import pytest

from app.utils.extractor import extract_text, file_extension


def build_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class TestExtractText:

    def test_pdf(self):
        result = extract_text(build_pdf("Python developer with FastAPI"), ".pdf")
        assert result.ok
        assert "Python developer with FastAPI" in result.text

    def test_plain_text_utf8(self):
        result = extract_text("Ingénieur logiciel, München".encode("utf-8"), ".txt")
        assert result.ok
        assert result.text == "Ingénieur logiciel, München"

    def test_extension_without_dot_and_upper_case(self):
        assert extract_text(b"resume body", "TXT").ok

    @pytest.mark.parametrize("extension", [".docx", ".png", ""])
    def test_unsupported(self, extension):
        result = extract_text(b"whatever", extension)
        assert result.status == "unsupported"
        assert not result.ok
        assert result.text == ""

    def test_corrupt_pdf_does_not_raise(self):
        result = extract_text(b"%PDF-1.4 truncated garbage", ".pdf")
        assert result.status == "failed"
        assert result.text == ""

    def test_empty_buffer(self):
        assert extract_text(b"", ".pdf").status == "failed"

    def test_invalid_utf8(self):
        assert extract_text(b"\xff\xfe\xfa", ".txt").status == "failed"

    def test_whitespace_only_text_is_not_ok(self):
        assert not extract_text(b"   \n  ", ".txt").ok


def test_file_extension():
    assert file_extension("My Resume.PDF") == ".pdf"
    assert file_extension("notes") == ""
    assert file_extension(None) == ""
