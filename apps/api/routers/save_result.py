"""
Saved result archive router.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from services.archive import list_saved_results, save_result
from services.errors import InvalidInputError
from services.store import ContentStore, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


class SaveResultResponse(BaseModel):
    success: bool
    id: str
    message: str


class SavedResultsResponse(BaseModel):
    results: List[Dict[str, Any]]


@router.post("/save-result", response_model=SaveResultResponse)
async def save_analysis_result(
    result: Any = Body(default=None),
    store: ContentStore = Depends(get_store),
):
    """Archive a result object. The object must carry a `title`."""
    try:
        save_id = await save_result(store, result)
        return SaveResultResponse(success=True, id=save_id, message="Result saved successfully")
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Save result error")
        return JSONResponse(status_code=500, content={"error": "Failed to save result"})


@router.get("/save-result", response_model=SavedResultsResponse)
async def get_saved_results(store: ContentStore = Depends(get_store)):
    """List archived results, most recently saved first."""
    try:
        return SavedResultsResponse(results=await list_saved_results(store))
    except Exception:
        logger.exception("Get saved results error")
        return JSONResponse(status_code=500, content={"error": "Failed to retrieve saved results"})
