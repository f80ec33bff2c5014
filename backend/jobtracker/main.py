"""
Job Tracker API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration
- Database schema initialization
- CORS middleware for frontend communication
- Prometheus metrics
- API router registration and the CV storage mount

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── CORS Middleware
    ├── /api
    │   ├── /auth - Sign up, sign in, sign out
    │   ├── /fetch - Aggregate jobs from the remote feeds
    │   ├── /jobs - Browse saved jobs
    │   ├── /stats - Per-user counts
    │   └── /upload-cv - Store the user's CV
    ├── /storage - Uploaded files (read-only)
    └── /health, /metrics
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from jobtracker.api import api_router
from jobtracker.config import get_settings
from jobtracker.database import init_db, close_db
from jobtracker.middleware import setup_metrics
from jobtracker.services.storage import STORAGE_MOUNT

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Create the storage directory
        2. Initialize database tables

    Shutdown:
        1. Dispose of pooled database connections
    """
    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)
    await init_db()
    logger.info("Job tracker started")
    yield
    await close_db()


app = FastAPI(
    title="Job Tracker API",
    description="Collects remote job listings and keeps them per user",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)

app.include_router(api_router, prefix="/api")
app.mount(STORAGE_MOUNT, StaticFiles(directory=settings.storage_dir, check_dir=False), name="storage")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
