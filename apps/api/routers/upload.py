"""
Content ingestion router.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ingestion.web import get_http_client
from services.errors import InvalidInputError
from services.ingestion import ingest_file, ingest_source
from services.store import ContentStore, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/upload")
async def upload_content(
    request: Request,
    store: ContentStore = Depends(get_store),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Ingest a file upload or a JSON-described source.

    - multipart/form-data with a `file` field
    - JSON `{type: "youtube" | "url" | "text", url?, text?}`
    """
    try:
        content_type = request.headers.get("content-type") or ""
        if "multipart/form-data" in content_type:
            form = await request.form()
            upload = form.get("file")
            if upload is None or isinstance(upload, str):
                return JSONResponse(status_code=400, content={"error": "No file provided"})
            data = await upload.read()
            return await ingest_file(store, upload.filename or "", upload.content_type, data)

        try:
            payload = await request.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise InvalidInputError("Invalid request body")
        return await ingest_source(store, payload, http_client)
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Upload error")
        return JSONResponse(status_code=500, content={"error": "Upload failed"})
