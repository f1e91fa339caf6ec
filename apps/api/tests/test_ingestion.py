import json

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from ingestion.files import extract_file_content
from ingestion.web import extract_page_title, strip_html
from ingestion.youtube import extract_video_id, process_youtube_url
from services.errors import InvalidInputError


CONTENT_TTL = 3600 * 24 * 7


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s", "dQw4w9WgXcQ"),
        ("https://youtu.be/abc123XYZ", "abc123XYZ"),
        ("https://youtu.be/abc123XYZ?si=share", "abc123XYZ"),
        ("https://www.youtube.com/embed/emb_ID-1#frag", "emb_ID-1"),
    ],
)
def test_extract_video_id_supported_shapes(url, expected):
    assert extract_video_id(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://vimeo.com/123456",
        "https://www.youtube.com/@somechannel",
        "https://www.youtube.com/watch?list=PL123",
        "",
        None,
    ],
)
def test_extract_video_id_rejects_other_urls(url):
    assert extract_video_id(url) is None


@pytest.mark.asyncio
async def test_process_youtube_url_returns_unsupported_placeholder():
    result = await process_youtube_url("https://youtu.be/vid42")

    assert result.supported is False
    assert result.title == "YouTube Video"
    assert result.content == "YouTube transcript extraction not implemented yet. Video ID: vid42"
    assert result.metadata == {"duration": "Unknown", "url": "https://youtu.be/vid42"}


@pytest.mark.asyncio
async def test_process_youtube_url_invalid_raises():
    with pytest.raises(InvalidInputError):
        await process_youtube_url("https://example.com/watch")


def test_extract_file_content_decodes_text():
    result = extract_file_content("notes.md", "text/markdown", "# Heading\nCafé ☕\n".encode("utf-8"))

    assert result.supported is True
    assert result.content == "# Heading\nCafé ☕\n"


def test_extract_file_content_pdf_is_placeholder():
    result = extract_file_content("paper.pdf", "application/pdf", b"%PDF-1.7 binary stream")

    assert result.supported is False
    assert result.content == "PDF content extraction not implemented yet. File: paper.pdf"
    assert "%PDF" not in result.content


def test_extract_page_title_is_case_insensitive_with_fallback():
    assert extract_page_title("<html><TITLE>Hello Page</TITLE></html>") == "Hello Page"
    assert extract_page_title("<html><body>no title</body></html>") == "Web Article"


def test_strip_html_collapses_whitespace_and_truncates():
    html = "<html>\n<body>\n  <h1>Title</h1>\n\n<p>Some   <b>bold</b> text</p>\n</body></html>"
    assert strip_html(html) == "Title Some bold text"
    assert strip_html("<p>" + "a" * 6000 + "</p>") == "a" * 5000


@pytest.mark.asyncio
async def test_upload_text_file_stores_exact_content(api_client, fake_redis):
    text = "line one\nline two\n\ttabbed"
    resp = await api_client.post(
        "/api/upload",
        files={"file": ("notes.txt", text.encode("utf-8"), "text/plain")},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == text
    assert data["message"] == "File uploaded successfully"

    key = f"content:{data['id']}"
    stored = json.loads(fake_redis.values[key])
    assert stored["type"] == "file"
    assert stored["name"] == "notes.txt"
    assert stored["size"] == len(text.encode("utf-8"))
    assert stored["content"] == text
    assert stored["uploadedAt"]
    assert fake_redis.ttls[key] == CONTENT_TTL


@pytest.mark.asyncio
async def test_upload_pdf_stores_placeholder(api_client, fake_redis):
    resp = await api_client.post(
        "/api/upload",
        files={"file": ("lecture.pdf", b"%PDF-1.4 secret bytes", "application/pdf")},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == "PDF content extraction not implemented yet. File: lecture.pdf"
    stored = json.loads(fake_redis.values[f"content:{data['id']}"])
    assert "secret bytes" not in stored["content"]


@pytest.mark.asyncio
async def test_upload_multipart_without_file_returns_400(api_client, fake_redis):
    resp = await api_client.post("/api/upload", data={"other": "value"}, files={"attachment": ("a.txt", b"x")})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No file provided"}
    assert fake_redis.values == {}


@pytest.mark.asyncio
async def test_upload_text_input(api_client, fake_redis):
    resp = await api_client.post("/api/upload", json={"type": "text", "text": "Raw study notes"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Text Input"
    assert data["content"] == "Raw study notes"
    assert data["message"] == "Content processed successfully"

    stored = json.loads(fake_redis.values[f"content:{data['id']}"])
    assert stored["type"] == "text"
    assert stored["metadata"] == {}
    assert fake_redis.ttls[f"content:{data['id']}"] == CONTENT_TTL


@pytest.mark.asyncio
async def test_upload_youtube_link(api_client, fake_redis):
    url = "https://www.youtube.com/watch?v=abcDEF12345"
    resp = await api_client.post("/api/upload", json={"type": "youtube", "url": url})

    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "YouTube Video"
    assert data["content"] == "YouTube transcript extraction not implemented yet. Video ID: abcDEF12345"
    assert data["duration"] == "Unknown"
    assert data["url"] == url

    stored = json.loads(fake_redis.values[f"content:{data['id']}"])
    assert stored["metadata"] == {"duration": "Unknown", "url": url}


@pytest.mark.asyncio
async def test_upload_invalid_youtube_link_returns_400(api_client, fake_redis):
    resp = await api_client.post("/api/upload", json={"type": "youtube", "url": "https://example.com/video"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid YouTube URL"}
    assert fake_redis.values == {}


@pytest.mark.asyncio
async def test_upload_web_page(api_client, fake_redis, web_pages):
    url = "https://example.com/article"
    web_pages[url] = (
        "<html><head><title>Async Python</title></head>"
        "<body><h1>Event loops</h1>\n\n<p>Coroutines   yield control.</p></body></html>"
    )

    resp = await api_client.post("/api/upload", json={"type": "url", "url": url})

    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Async Python"
    assert data["content"] == "Async Python Event loops Coroutines yield control."
    assert data["url"] == url

    stored = json.loads(fake_redis.values[f"content:{data['id']}"])
    assert stored["type"] == "url"
    assert stored["metadata"] == {"url": url}


@pytest.mark.asyncio
async def test_upload_web_page_fetch_failure_returns_500(api_client, fake_redis, web_pages):
    url = "https://unreachable.example.com/"
    web_pages[url] = httpx.ConnectError("connection refused")

    resp = await api_client.post("/api/upload", json={"type": "url", "url": url})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Upload failed"}
    assert fake_redis.values == {}


@pytest.mark.asyncio
async def test_upload_unknown_type_returns_400(api_client):
    resp = await api_client.post("/api/upload", json={"type": "podcast", "url": "https://example.com"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Unsupported content type"}


@pytest.mark.asyncio
async def test_upload_non_object_body_returns_400(api_client):
    resp = await api_client.post("/api/upload", json=["text"])

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}


@pytest.mark.asyncio
async def test_upload_store_failure_returns_500(api_client, fake_redis):
    async def broken_setex(*args):
        raise RedisConnectionError("Connection refused")

    fake_redis.setex = broken_setex

    text_resp = await api_client.post("/api/upload", json={"type": "text", "text": "notes"})
    file_resp = await api_client.post("/api/upload", files={"file": ("notes.txt", b"notes", "text/plain")})

    for resp in (text_resp, file_resp):
        assert resp.status_code == 500
        assert resp.json() == {"error": "Upload failed"}
