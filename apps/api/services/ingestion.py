"""Content ingestion: normalize a source into a ContentItem and persist it."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from config import settings
from ingestion.files import extract_file_content
from ingestion.types import ExtractedContent
from ingestion.web import extract_web_content
from ingestion.youtube import process_youtube_url
from services.errors import InvalidInputError
from services.store import ContentStore, content_key

logger = logging.getLogger(__name__)

TEXT_INPUT_TITLE = "Text Input"
FILE_UPLOADED_MESSAGE = "File uploaded successfully"
CONTENT_PROCESSED_MESSAGE = "Content processed successfully"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def ingest_file(
    store: ContentStore,
    filename: str,
    media_type: Optional[str],
    data: bytes,
) -> Dict[str, Any]:
    """Store an uploaded file as a ``file`` ContentItem."""
    extracted = extract_file_content(filename, media_type, data)
    content_id = str(uuid.uuid4())
    record = {
        "id": content_id,
        "type": "file",
        "name": extracted.title,
        "size": len(data),
        "content": extracted.content,
        "uploadedAt": _now_iso(),
    }
    await store.put_json(content_key(content_id), settings.CONTENT_TTL_SECONDS, record)
    logger.info("Stored file content %s (%d bytes, supported=%s)", content_id, len(data), extracted.supported)
    return {"id": content_id, "content": extracted.content, "message": FILE_UPLOADED_MESSAGE}


async def _extract_source(
    source_type: Any,
    url: Any,
    text: Any,
    http_client: httpx.AsyncClient,
) -> ExtractedContent:
    if source_type == "youtube":
        return await process_youtube_url(url if isinstance(url, str) else None)
    if source_type == "url":
        return await extract_web_content(url if isinstance(url, str) else None, http_client)
    if source_type == "text":
        if not isinstance(text, str):
            raise InvalidInputError("A text value is required for text content")
        return ExtractedContent(title=TEXT_INPUT_TITLE, content=text)
    raise InvalidInputError("Unsupported content type")


async def ingest_source(
    store: ContentStore,
    payload: Dict[str, Any],
    http_client: httpx.AsyncClient,
) -> Dict[str, Any]:
    """Store a YouTube link, web page or raw text described by ``{type, url?, text?}``."""
    source_type = payload.get("type")
    extracted = await _extract_source(source_type, payload.get("url"), payload.get("text"), http_client)

    content_id = str(uuid.uuid4())
    record = {
        "id": content_id,
        "type": source_type,
        "title": extracted.title,
        "content": extracted.content,
        "metadata": extracted.metadata,
        "uploadedAt": _now_iso(),
    }
    await store.put_json(content_key(content_id), settings.CONTENT_TTL_SECONDS, record)
    logger.info("Stored %s content %s (supported=%s)", source_type, content_id, extracted.supported)
    return {
        "id": content_id,
        "title": extracted.title,
        "content": extracted.content,
        **extracted.metadata,
        "message": CONTENT_PROCESSED_MESSAGE,
    }
