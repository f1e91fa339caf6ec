"""
Analysis router.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from analysis.generator import generate_analysis
from analysis.models import AnalysisResult, AnalyzeRequest
from config import settings
from services.gateway import CompletionGateway, get_gateway
from services.store import ContentStore, analysis_key, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_content(
    request: Optional[AnalyzeRequest] = None,
    store: ContentStore = Depends(get_store),
    gateway: CompletionGateway = Depends(get_gateway),
):
    """Generate summary, learning plan, insights and Q&A for the submitted content."""
    if request is None or not request.content:
        return JSONResponse(status_code=400, content={"error": "No content provided for analysis"})

    try:
        result = await generate_analysis(gateway, request.content)
        await store.put_json(
            analysis_key(result.id),
            settings.ANALYSIS_TTL_SECONDS,
            result.model_dump(mode="json", by_alias=True),
        )
        return result
    except Exception:
        logger.exception("Analysis error")
        return JSONResponse(status_code=500, content={"error": "Analysis failed"})
