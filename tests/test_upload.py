"""Tests for local validation of uploaded resumes."""

import pytest

from resume_analyzer.errors import LocalValidationError
from resume_analyzer.parsers.pdf_upload import (
    PDF_MEDIA_TYPE,
    ValidatedUpload,
    count_pdf_pages,
    validate_upload,
)


class TestValidateUpload:
    def test_accepts_pdf(self, minimal_pdf_bytes):
        upload = validate_upload("cv.pdf", PDF_MEDIA_TYPE, minimal_pdf_bytes)
        assert isinstance(upload, ValidatedUpload)
        assert upload.filename == "cv.pdf"
        assert upload.data == minimal_pdf_bytes
        assert upload.page_count == 1

    def test_mime_type_case_insensitive(self, minimal_pdf_bytes):
        assert validate_upload("cv.pdf", "Application/PDF", minimal_pdf_bytes).page_count == 1

    @pytest.mark.parametrize("mime_type", ["image/png", "text/plain", "", None])
    def test_rejects_other_types(self, mime_type, minimal_pdf_bytes):
        with pytest.raises(LocalValidationError, match="valid PDF"):
            validate_upload("cv.png", mime_type, minimal_pdf_bytes)

    def test_rejects_empty_file(self):
        with pytest.raises(LocalValidationError, match="empty"):
            validate_upload("cv.pdf", PDF_MEDIA_TYPE, b"")

    def test_rejects_oversize_file(self, minimal_pdf_bytes):
        with pytest.raises(LocalValidationError, match="upload limit"):
            validate_upload("cv.pdf", PDF_MEDIA_TYPE, minimal_pdf_bytes, max_bytes=10)

    def test_rejects_unreadable_pdf(self):
        with pytest.raises(LocalValidationError, match="could not be read"):
            validate_upload("cv.pdf", PDF_MEDIA_TYPE, b"this is not a pdf")


class TestCountPdfPages:
    def test_counts_pages(self, minimal_pdf_bytes):
        assert count_pdf_pages(minimal_pdf_bytes) == 1

    def test_multi_page(self):
        import fitz

        doc = fitz.open()
        for _ in range(3):
            doc.new_page()
        data = doc.tobytes()
        doc.close()

        assert count_pdf_pages(data) == 3
