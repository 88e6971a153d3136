"""
Sports Store API Server
Image uploads, upload retrieval, static catalog, health and metrics.
"""

import os
import logging
import time
from typing import List
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
import uvicorn
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from sports_store.core.config import settings
from sports_store.core.database import engine, init_db, mask_database_url
from sports_store.core.exceptions import StoreError, MSG_INTERNAL_ERROR
from sports_store.core.migrations import pending_migrations
from sports_store.api.routes import uploads, catalog, health
from sports_store.services.prometheus_metrics import metrics

load_dotenv()

logger = logging.getLogger("sports_store")
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


# ── Prometheus Middleware ───────────────────────────────────────────────────
class PrometheusMiddleware(BaseHTTPMiddleware):
    """Tracks HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path == "/metrics":
            return await call_next(request)

        # Stored file names would explode label cardinality
        path = request.url.path
        if path.startswith("/api/uploads/"):
            endpoint = "/api/uploads/{file}"
        else:
            endpoint = path
        method = request.method
        start_time = time.time()

        response = await call_next(request)
        duration = time.time() - start_time

        metrics.http_requests_total.labels(method=method, endpoint=endpoint, status_code=str(response.status_code)).inc()
        metrics.http_request_duration.labels(method=method, endpoint=endpoint).observe(duration)

        return response


# ── Lifespan Management ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Sports Store API...")
    logger.info("Database: %s", mask_database_url(settings.database_url))
    logger.info("Uploads: %s", settings.upload_directory.resolve())

    try:
        settings.upload_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.exception("❌ Could not create upload directory: %s", e)

    # Migrations normally run out-of-band (python -m sports_store.scripts.migrate)
    try:
        if settings.AUTO_MIGRATE:
            init_db()
        else:
            pending = pending_migrations(engine)
            if pending:
                logger.warning("⚠️ %d pending migration(s): %s", len(pending), [m.label for m in pending])
            else:
                logger.info("✅ Database schema up to date")
    except Exception as e:
        logger.exception("❌ Database check failed: %s", e)

    logger.info("✅ Startup complete | Docs: /docs | Health: /health/ready")

    yield

    logger.info("Shutting down...")
    engine.dispose()


# ── FastAPI App ─────────────────────────────────────────────────────────────
app = FastAPI(
    title="Sports Store API",
    description="Image uploads and catalog for the sports store",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS Configuration ──────────────────────────────────────────────────────
allowed_origins: List[str] = [
    "http://localhost:3000", "http://127.0.0.1:3000",  # Storefront
    "http://localhost:8000", "http://127.0.0.1:8000",  # Same origin
]
allowed_origins.extend(settings.allowed_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENABLE_PROMETHEUS_METRICS:
    app.add_middleware(PrometheusMiddleware)

# ── Routes ──────────────────────────────────────────────────────────────────
app.include_router(uploads.router)
app.include_router(catalog.router)
app.include_router(health.router)


# ── Endpoints ───────────────────────────────────────────────────────────────
@app.get("/metrics", include_in_schema=False)
async def prometheus_metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
async def api_root():
    return {
        "message": "Sports Store API",
        "version": app.version,
        "documentation": "/docs",
        "health_check": "/health/ready",
    }


# ── Exception Handlers ──────────────────────────────────────────────────────
@app.exception_handler(StoreError)
async def store_error_handler(request, exc: StoreError):
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    logger.warning(f"HTTP {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    logger.warning(f"HTTP 422: {message}")
    return JSONResponse(status_code=422, content={"error": message or "Invalid request"})


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"error": MSG_INTERNAL_ERROR})


# ── Main Entry Point ────────────────────────────────────────────────────────
if __name__ == "__main__":
    uvicorn.run(
        "sports_store.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEV_RELOAD", "false").lower() in ("1", "true", "yes"),
        workers=int(os.getenv("UVICORN_WORKERS", "1")),
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )
