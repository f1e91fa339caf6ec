"""Web page fetch-and-strip extraction."""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx
from fastapi import Request

from config import settings
from ingestion.types import ExtractedContent
from services.errors import ExtractionFailedError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TITLE = "Web Article"

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(follow_redirects=True, timeout=settings.WEB_FETCH_TIMEOUT_SECONDS)


def extract_page_title(html: str) -> str:
    match = _TITLE_RE.search(html)
    return match.group(1) if match else DEFAULT_PAGE_TITLE


def strip_html(html: str, max_chars: int = settings.WEB_CONTENT_MAX_CHARS) -> str:
    """Drop tags, collapse whitespace and keep the first ``max_chars`` characters."""
    text = _TAG_RE.sub(" ", html)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[:max_chars]


async def extract_web_content(url: Optional[str], client: httpx.AsyncClient) -> ExtractedContent:
    """
    Fetch ``url`` and reduce the page to plain text.

    The response status is not checked: error pages are stripped like any
    other page. Transport failures raise ``ExtractionFailedError``.
    """
    if not url:
        raise InvalidInputError("A url is required for url content")
    try:
        response = await client.get(url)
        html = response.text
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        raise ExtractionFailedError("Failed to extract web content") from exc

    return ExtractedContent(
        title=extract_page_title(html),
        content=strip_html(html),
        metadata={"url": url},
    )


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency returning the shared outbound HTTP client."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        client = create_http_client()
        request.app.state.http_client = client
    return client
