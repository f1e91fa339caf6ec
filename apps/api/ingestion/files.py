"""Uploaded file text extraction."""

from __future__ import annotations

import logging
from typing import Optional

from ingestion.types import ExtractedContent

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


def extract_file_content(filename: str, media_type: Optional[str], data: bytes) -> ExtractedContent:
    """
    Return the text of an uploaded file.

    PDFs are not parsed: the content is a placeholder naming the file.
    Everything else is decoded as UTF-8 with invalid bytes replaced.
    """
    name = filename or "upload"
    if (media_type or "").split(";")[0].strip().lower() == PDF_MEDIA_TYPE:
        logger.warning("PDF extraction not supported, storing placeholder for %s", name)
        return ExtractedContent(
            title=name,
            content=f"PDF content extraction not implemented yet. File: {name}",
            supported=False,
        )
    return ExtractedContent(title=name, content=data.decode("utf-8", errors="replace"))
