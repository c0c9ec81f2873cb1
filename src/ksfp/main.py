"""
KSFP Portal API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Redis connection (session storage and OTP attempt limiting)
- School catalogue loading
- Background job scheduler (session watchers)
- CORS middleware and API routing
- Health check endpoints
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ksfp.api import api_router
from ksfp.core.config import settings
from ksfp.core.redis import close_redis, init_redis
from ksfp.core.scheduler import (
    list_registered_jobs,
    start_scheduler,
    stop_scheduler,
    trigger_job_manually,
)
from ksfp.modules.schools import SchoolCatalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection
    - School catalogue
    - Background job scheduler
    """
    # Startup
    print(f"Starting KSFP Portal API in {settings.python_env} mode...")

    # Redis is optional outside production; storage and rate limits fall back to memory
    try:
        await init_redis()
        print("[OK] Redis connected")
    except Exception as e:
        print(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    app.state.school_catalog = SchoolCatalog.from_file(settings.schools_data_path)
    print(f"[OK] Loaded {len(app.state.school_catalog)} school(s)")

    try:
        await start_scheduler()
        print("[OK] Background scheduler started")
    except Exception as e:
        print(f"[FAIL] Background scheduler failed to start: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down KSFP Portal API...")

    await stop_scheduler()
    print("[OK] Background scheduler stopped")

    await close_redis()
    print("[OK] Cleanup complete")


app = FastAPI(
    title="KSFP Portal API",
    description="KSFP School Finder Portal API",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to KSFP Portal API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {"status": "ready"}


# ============================================
# Background Job Debug Endpoints
# ============================================
# Development only. Session watcher jobs run on their own schedule otherwise.

if settings.is_development:

    @app.get("/debug/jobs", tags=["Debug"])
    async def list_jobs():
        """List registered background jobs and their next run time."""
        return {"jobs": list_registered_jobs()}

    @app.post("/debug/jobs/{job_id}/trigger", tags=["Debug"])
    async def trigger_job(job_id: str):
        """
        Run a background job immediately, bypassing its trigger.

        Raises:
            HTTPException 400: If job_id is not found.
        """
        try:
            return await trigger_job_manually(job_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
