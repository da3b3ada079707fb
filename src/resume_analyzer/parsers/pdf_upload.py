"""Validation of uploaded resume files before analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from resume_analyzer.errors import LocalValidationError

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class ValidatedUpload:
    """A PDF that passed local checks and may be sent for analysis."""

    filename: str
    data: bytes
    page_count: int


def count_pdf_pages(data: bytes) -> int:
    """Open PDF bytes with PyMuPDF and return the page count.

    Raises:
        LocalValidationError: the bytes are not a readable PDF.
    """
    import fitz  # PyMuPDF

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise LocalValidationError("The file could not be read as a PDF.") from exc
    try:
        return doc.page_count
    finally:
        doc.close()


def validate_upload(
    filename: str,
    mime_type: str | None,
    data: bytes,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ValidatedUpload:
    """Check an uploaded file and return it wrapped as a ValidatedUpload.

    Rejects non-PDF MIME types, empty or oversize files, and PDFs with no
    pages. Every rejection raises LocalValidationError with a message fit
    for display.
    """
    if (mime_type or "").lower() != PDF_MEDIA_TYPE:
        raise LocalValidationError("Please upload a valid PDF file.")
    if not data:
        raise LocalValidationError("The uploaded file is empty.")
    if len(data) > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise LocalValidationError(f"The file exceeds the {limit_mb:g}MB upload limit.")

    pages = count_pdf_pages(data)
    if pages == 0:
        raise LocalValidationError("The PDF has no pages.")

    logger.info("Accepted upload %s (%d bytes, %d pages)", filename, len(data), pages)
    return ValidatedUpload(filename=filename, data=data, page_count=pages)
