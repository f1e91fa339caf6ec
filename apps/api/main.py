"""
Study Content Analyzer - FastAPI Backend
Main application entry point with health check and API routing.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from config import settings
from ingestion.web import create_http_client
from routers import (
    health,
    upload,
    analyze,
    save_result,
)
from services.errors import InvalidInputError, StoreUnavailableError
from services.gateway import CompletionGateway
from services.store import ContentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    print("🚀 Starting Study Content Analyzer API...")
    app.state.store = ContentStore.from_url(settings.REDIS_URL)
    app.state.gateway = CompletionGateway.from_settings()
    app.state.http_client = create_http_client()
    if not app.state.gateway.configured:
        print("⚠️ GROQ_API_KEY not set, analyses will use fallback content.")
    try:
        await app.state.store.ping()
        print("🗄️ Redis connection verified.")
    except StoreUnavailableError as exc:
        print(f"⚠️ Redis not reachable yet: {exc}")
    yield
    # Shutdown
    await app.state.http_client.aclose()
    await app.state.gateway.close()
    await app.state.store.close()
    print("👋 Shutting down API...")


app = FastAPI(
    title="Study Content Analyzer API",
    description="Ingest study material and generate summaries, learning plans, insights and Q&A",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error("Store unavailable: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Storage unavailable"})


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(upload.router, prefix="/api", tags=["Upload"])
app.include_router(analyze.router, prefix="/api", tags=["Analysis"])
app.include_router(save_result.router, prefix="/api", tags=["Saved Results"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Study Content Analyzer API",
        "version": "0.1.0",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
