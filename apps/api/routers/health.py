"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.errors import StoreUnavailableError
from services.gateway import CompletionGateway, get_gateway
from services.store import ContentStore, get_store

router = APIRouter()


async def _redis_status(store: ContentStore) -> str:
    try:
        await store.ping()
        return "up"
    except StoreUnavailableError as e:
        return f"down: {str(e)}"


@router.get("/health")
async def health_check(
    store: ContentStore = Depends(get_store),
    gateway: CompletionGateway = Depends(get_gateway),
):
    """
    Health check endpoint.
    Returns overall system health status.
    """
    health_status = {
        "status": "healthy",
        "api": "up",
        "redis": await _redis_status(store),
        "completion_api": "configured" if gateway.configured else "missing",
    }
    if health_status["redis"] != "up":
        health_status["status"] = "degraded"
    return health_status


@router.get("/health/ready")
async def readiness_check(store: ContentStore = Depends(get_store)):
    """Kubernetes-style readiness probe."""
    redis_status = await _redis_status(store)
    if redis_status != "up":
        return JSONResponse(
            status_code=503,
            content={"ready": False, "failing": ["redis"]},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
