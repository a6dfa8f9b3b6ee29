"""
JobReel - Main Application

FastAPI backend for short video resumes and video job postings:
- Pluggable entity store (in-memory or PostgreSQL)
- JWT sessions in an HTTP-only cookie or Bearer header
- Video / resume uploads to local disk or Supabase Storage

Run: uvicorn jobreel.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from jobreel.api.routes import api_router
from jobreel.core.config import get_settings
from jobreel.services.blob_storage import get_blob_store
from jobreel.storage import DuplicateError, get_storage

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the store (and seed it) at startup rather than on first request
    storage = get_storage()
    logger.info("JobReel API starting (storage=%s, blobs=%s)", settings.storage_backend, settings.blob_backend)
    if not storage.ping():
        logger.warning("Storage backend is not reachable")
    get_blob_store()
    yield
    logger.info("JobReel API shutting down")


# Create FastAPI app
app = FastAPI(
    title="JobReel",
    description="""
    Short-form video hiring: job seekers post video resumes,
    employers post video job listings.

    ## Features
    - **Authentication**: session cookie or Bearer token
    - **Videos**: feeds by kind, recommendations, likes, shares, views
    - **Applications**: apply with a resume video, employers track status
    - **Comments, Messages, Bookmarks**
    - **Uploads**: MP4/WebM videos and PDF resumes
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLERS
# ============================================================

def _format_validation_errors(errors) -> str:
    parts = []
    for error in errors:
        # Drop the "body"/"query"/"path" prefix
        location = [str(loc) for loc in error.get("loc", ())[1:]]
        field = ".".join(location) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _format_validation_errors(exc.errors())})


@app.exception_handler(DuplicateError)
async def duplicate_exception_handler(request: Request, exc: DuplicateError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include API routes
app.include_router(api_router, prefix="/api")

# Uploaded media for the local blob backend
if settings.blob_backend == "local":
    app.mount("/media", StaticFiles(directory=settings.media_root, check_dir=False), name="media")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "JobReel", "docs": "/docs"}
